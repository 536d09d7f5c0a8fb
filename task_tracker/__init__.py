"""Task Tracker - a task and category manager with local or remote storage."""

from task_tracker.config import TrackerConfig
from task_tracker.exceptions import (
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    RemoteFailureError,
    TrackerError,
    TransportError,
)
from task_tracker.models import Category, Task
from task_tracker.registry import IdPolicy, Registry
from task_tracker.storage import Backend, LocalBackend, RemoteBackend, create_backend
from task_tracker.themes import Palette, Theme, accent_for, palette_for, validate_theme

__version__ = "1.0.0"

__all__ = [
    "Backend",
    "Category",
    "ConfigurationError",
    "IdPolicy",
    "InvalidInputError",
    "LocalBackend",
    "NotFoundError",
    "Palette",
    "PersistenceError",
    "Registry",
    "RemoteBackend",
    "RemoteFailureError",
    "Task",
    "Theme",
    "TrackerConfig",
    "TrackerError",
    "TransportError",
    "accent_for",
    "create_backend",
    "palette_for",
    "validate_theme",
]
