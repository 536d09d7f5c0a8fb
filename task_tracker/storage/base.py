"""Abstract base class for persistence backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from task_tracker.models import Category, Task


class Backend(ABC):
    """Abstract interface for task and category storage.

    Local and remote storage implement the same operations with the same
    error semantics, so the CLI never needs to know which one it holds.
    Failures are reported by raising TrackerError subclasses.

    Backends are context managers; leaving the block calls ``close()``,
    which is where the local backend writes its document.
    """

    # Label for tasks with no category in list_tasks_grouped().
    uncategorized_label: str = "Uncategorized"

    @abstractmethod
    def create_task(self, name: str, description: str, eta: str) -> Task:
        """Create a task and return it."""
        pass

    @abstractmethod
    def create_category(self, name: str) -> Category:
        """Create a category and return it."""
        pass

    @abstractmethod
    def edit_task(self, task_id: int, field: str, value: str) -> None:
        """Replace ``field`` (name, description or eta) of a task.

        Raises:
            NotFoundError: If no task has this id.
            InvalidInputError: If the field is not editable.
        """
        pass

    @abstractmethod
    def edit_category(self, category_id: int, name: str) -> None:
        """Rename a category.

        Raises:
            NotFoundError: If no category has this id.
        """
        pass

    @abstractmethod
    def delete_task(self, task_id: int) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If no task has this id.
        """
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category without touching tasks that carry its name.

        Raises:
            NotFoundError: If no category has this id.
        """
        pass

    @abstractmethod
    def assign_category(self, task_id: int, category_id: int) -> str | None:
        """Stamp a task with a category's current name.

        Returns:
            The assigned category name, or None when the backend does not
            know it.

        Raises:
            NotFoundError: For an unknown category (checked first) or task.
        """
        pass

    @abstractmethod
    def list_tasks_grouped(self) -> dict[str, list[Task]]:
        """Return all tasks grouped by category name.

        Group order is unspecified; tasks keep their stored order within
        a group.
        """
        pass

    @abstractmethod
    def get_theme(self) -> str:
        """Return the stored theme name."""
        pass

    @abstractmethod
    def change_theme(self, name: str) -> str:
        """Validate and store a new theme name.

        Raises:
            InvalidInputError: If the name is not a supported theme; the
                stored theme is left unchanged.
        """
        pass

    def close(self) -> None:
        """Release resources and flush state."""

    def __enter__(self) -> Backend:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
