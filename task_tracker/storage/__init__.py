"""Persistence backends for the task tracker."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from task_tracker.storage.base import Backend
from task_tracker.storage.local import LocalBackend, load_registry, save_registry
from task_tracker.storage.remote import RemoteBackend

if TYPE_CHECKING:
    import httpx

    from task_tracker.config import TrackerConfig

logger = logging.getLogger(__name__)


def create_backend(
    config: TrackerConfig,
    transport: httpx.BaseTransport | None = None,
) -> Backend:
    """Build the backend selected by ``config.mode``.

    Called once per run. ``transport`` is only used by the remote backend.

    Raises:
        PersistenceError: If the local document exists but is unusable.
    """
    if config.is_remote:
        logger.debug("Using remote backend at %s", config.base_url)
        return RemoteBackend(config, transport=transport)
    logger.debug("Using local backend at %s", config.data_file)
    return LocalBackend(config.data_file, id_policy=config.id_allocation)


__all__ = [
    "Backend",
    "LocalBackend",
    "RemoteBackend",
    "create_backend",
    "load_registry",
    "save_registry",
]
