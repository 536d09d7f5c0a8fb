"""In-memory registry of tasks, categories and the current theme.

The registry is the single owner of local-mode state for one run. It is
loaded from the state document, mutated by the operations below, and
handed back to the document for saving. Nothing else holds references to
its lists, so no locking is involved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, Optional

from task_tracker.exceptions import NotFoundError
from task_tracker.models import Category, Task
from task_tracker.themes import DEFAULT_THEME, validate_theme

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


class IdPolicy(Enum):
    """How new ids are allocated.

    COUNT is the historical rule: ``len(collection) + 1``. After a deletion
    it can hand out an id that a surviving record already holds.
    NEXT_MAX allocates ``max(existing ids) + 1`` and never collides.
    """

    COUNT = "count"
    NEXT_MAX = "next-max"

    @classmethod
    def from_string(cls, value: str) -> IdPolicy:
        """Parse a policy name, case-insensitive."""
        try:
            return cls(value.lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid id policy '{value}'. Must be one of: {valid}")

    def next_id(self, existing_ids: Sequence[int]) -> int:
        if self is IdPolicy.NEXT_MAX:
            return max(existing_ids, default=0) + 1
        return len(existing_ids) + 1


def group_by_category(
    tasks: Iterable[Task],
    label: Callable[[Task], Optional[str]],
    default: str,
) -> dict[str, list[Task]]:
    """Group tasks under the label returned for each one.

    Tasks whose label is None go under ``default``. Order inside a group
    follows the order of ``tasks``.
    """
    groups: dict[str, list[Task]] = {}
    for task in tasks:
        name = label(task)
        groups.setdefault(default if name is None else name, []).append(task)
    return groups


class Registry:
    """Tasks, categories and theme for a single run."""

    def __init__(
        self,
        tasks: Optional[list[Task]] = None,
        categories: Optional[list[Category]] = None,
        theme: str = DEFAULT_THEME.value,
        id_policy: IdPolicy = IdPolicy.COUNT,
    ) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._categories: list[Category] = list(categories or [])
        self._theme = theme
        self._id_policy = id_policy

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def theme(self) -> str:
        return self._theme

    @property
    def id_policy(self) -> IdPolicy:
        return self._id_policy

    # -- lookups -----------------------------------------------------------

    def _task_index(self, task_id: int) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise NotFoundError("task", task_id)

    def _category_index(self, category_id: int) -> int:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                return index
        raise NotFoundError("category", category_id)

    def get_task(self, task_id: int) -> Task:
        """Return the first task with this id."""
        return self._tasks[self._task_index(task_id)]

    def get_category(self, category_id: int) -> Category:
        return self._categories[self._category_index(category_id)]

    # -- tasks -------------------------------------------------------------

    def create_task(self, name: str, description: str, eta: str) -> Task:
        task_id = self._id_policy.next_id([t.id for t in self._tasks])
        task = Task(id=task_id, name=name, description=description, eta=eta)
        self._tasks.append(task)
        logger.debug("Created task id=%d name=%r", task.id, task.name)
        return task

    def edit_task(self, task_id: int, field: str, value: str) -> Task:
        """Replace one editable field of a task.

        The id is resolved before the field is checked, so an unknown id
        reports NotFoundError even when the field is also invalid.
        """
        index = self._task_index(task_id)
        updated = self._tasks[index].with_field(field, value)
        self._tasks[index] = updated
        logger.debug("Edited task id=%d field=%s", task_id, field)
        return updated

    def delete_task(self, task_id: int) -> None:
        """Remove every task carrying this id."""
        self._task_index(task_id)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        logger.debug("Deleted task id=%d", task_id)

    # -- categories --------------------------------------------------------

    def create_category(self, name: str) -> Category:
        category_id = self._id_policy.next_id([c.id for c in self._categories])
        category = Category(id=category_id, name=name)
        self._categories.append(category)
        logger.debug("Created category id=%d name=%r", category.id, category.name)
        return category

    def edit_category(self, category_id: int, name: str) -> Category:
        """Rename a category. Tasks already carrying the old name keep it."""
        index = self._category_index(category_id)
        updated = self._categories[index].with_name(name)
        self._categories[index] = updated
        logger.debug("Renamed category id=%d to %r", category_id, name)
        return updated

    def delete_category(self, category_id: int) -> None:
        """Remove a category. Tasks already carrying its name keep it."""
        self._category_index(category_id)
        self._categories = [c for c in self._categories if c.id != category_id]
        logger.debug("Deleted category id=%d", category_id)

    def assign_category(self, task_id: int, category_id: int) -> Task:
        """Stamp a task with the current name of a category.

        The category is resolved first; if it is missing the task is not
        looked at.
        """
        category = self.get_category(category_id)
        index = self._task_index(task_id)
        updated = self._tasks[index].with_updates(category=category.name)
        self._tasks[index] = updated
        logger.debug("Assigned task id=%d to category %r", task_id, category.name)
        return updated

    def list_tasks_grouped(self) -> dict[str, list[Task]]:
        return group_by_category(self._tasks, lambda t: t.category, UNCATEGORIZED)

    # -- theme -------------------------------------------------------------

    def change_theme(self, name: str) -> str:
        """Store a new theme; invalid names leave the current one in place."""
        theme = validate_theme(name)
        self._theme = theme.value
        logger.debug("Theme changed to %s", self._theme)
        return self._theme

    # -- serialization -----------------------------------------------------

    def to_document(self) -> dict[str, Any]:
        """Return the full state as a plain document."""
        return {
            "tasks": [t.to_dict() for t in self._tasks],
            "categories": [c.to_dict() for c in self._categories],
            "theme": self._theme,
        }

    @classmethod
    def from_document(
        cls,
        document: dict[str, Any],
        id_policy: IdPolicy = IdPolicy.COUNT,
    ) -> Registry:
        """Build a registry from a plain document.

        Missing top-level keys fall back to their empty defaults.

        Raises:
            KeyError, TypeError, ValueError: On malformed entries.
        """
        tasks = [Task.from_dict(item) for item in document.get("tasks") or []]
        categories = [Category.from_dict(item) for item in document.get("categories") or []]
        theme = document.get("theme") or DEFAULT_THEME.value
        return cls(tasks=tasks, categories=categories, theme=str(theme), id_policy=id_policy)
