"""Local YAML file backend.

The whole state lives in one YAML document::

    tasks:
    - id: 1
      name: Write report
      description: Quarterly numbers
      eta: Friday
      category: null
    categories:
    - id: 1
      name: Work
    theme: Desert

The document is read once when the backend is created and written once
when it is closed. A missing file means an empty registry with the
default theme.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from task_tracker.exceptions import PersistenceError
from task_tracker.models import Category, Task
from task_tracker.registry import UNCATEGORIZED, IdPolicy, Registry
from task_tracker.storage.base import Backend

logger = logging.getLogger(__name__)


def load_registry(path: Path, id_policy: IdPolicy = IdPolicy.COUNT) -> Registry:
    """Read a state document into a Registry.

    Raises:
        PersistenceError: If the file exists but cannot be read or parsed.
    """
    if not path.exists():
        logger.info("No state document at %s, starting empty", path)
        return Registry(id_policy=id_policy)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Unable to read {path}: {e}", path=path, original_error=e) from e

    try:
        document: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise PersistenceError(f"Unable to parse {path}: {e}", path=path, original_error=e) from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise PersistenceError(f"Unable to parse {path}: top level is not a mapping", path=path)

    try:
        registry = Registry.from_document(document, id_policy=id_policy)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise PersistenceError(
            f"Malformed state document {path}: {e!r}", path=path, original_error=e
        ) from e

    logger.debug(
        "Loaded %d tasks and %d categories from %s",
        len(registry.tasks),
        len(registry.categories),
        path,
    )
    return registry


def save_registry(registry: Registry, path: Path) -> None:
    """Write a Registry to a state document, replacing the file.

    Raises:
        PersistenceError: If the file cannot be written.
    """
    text = yaml.safe_dump(registry.to_document(), sort_keys=False, allow_unicode=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Unable to write {path}: {e}", path=path, original_error=e) from e
    logger.debug("Saved state document to %s", path)


class LocalBackend(Backend):
    """Backend that keeps state in a Registry backed by a YAML document."""

    uncategorized_label = UNCATEGORIZED

    def __init__(self, path: Path | str, id_policy: IdPolicy = IdPolicy.COUNT) -> None:
        """Load the document at ``path``.

        Raises:
            PersistenceError: If the document exists but is unusable.
        """
        self._path = Path(path)
        self._registry = load_registry(self._path, id_policy)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def registry(self) -> Registry:
        return self._registry

    def create_task(self, name: str, description: str, eta: str) -> Task:
        return self._registry.create_task(name, description, eta)

    def create_category(self, name: str) -> Category:
        return self._registry.create_category(name)

    def edit_task(self, task_id: int, field: str, value: str) -> None:
        self._registry.edit_task(task_id, field, value)

    def edit_category(self, category_id: int, name: str) -> None:
        self._registry.edit_category(category_id, name)

    def delete_task(self, task_id: int) -> None:
        self._registry.delete_task(task_id)

    def delete_category(self, category_id: int) -> None:
        self._registry.delete_category(category_id)

    def assign_category(self, task_id: int, category_id: int) -> str | None:
        return self._registry.assign_category(task_id, category_id).category

    def list_tasks_grouped(self) -> dict[str, list[Task]]:
        return self._registry.list_tasks_grouped()

    def get_theme(self) -> str:
        return self._registry.theme

    def change_theme(self, name: str) -> str:
        return self._registry.change_theme(name)

    def save(self) -> None:
        save_registry(self._registry, self._path)

    def close(self) -> None:
        """Write the document. Runs whether or not the last operation failed."""
        self.save()
