"""Task and Category models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from task_tracker.exceptions import InvalidInputError

# Task fields that may be changed with an edit operation.
EDITABLE_FIELDS: tuple[str, ...] = ("name", "description", "eta")


@dataclass(frozen=True)
class Task:
    """Immutable task representation.

    Attributes:
        id: Task identifier (``0`` for tasks not yet stored remotely).
        name: Task name.
        description: Task description.
        eta: Free-form estimate of when the task is due.
        category: Name of the assigned category, snapshotted at assignment.
        category_id: Category id as reported by the remote service.
    """

    id: int
    name: str
    description: str = ""
    eta: str = ""
    category: Optional[str] = None
    category_id: Optional[int] = None

    def with_updates(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        eta: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Task:
        """Create a new Task with updated fields."""
        return Task(
            id=self.id,
            name=name if name is not None else self.name,
            description=description if description is not None else self.description,
            eta=eta if eta is not None else self.eta,
            category=category if category is not None else self.category,
            category_id=self.category_id,
        )

    def with_field(self, field: str, value: str) -> Task:
        """Return a copy with one editable field replaced.

        Raises:
            InvalidInputError: If ``field`` is not one of EDITABLE_FIELDS.
        """
        if field not in EDITABLE_FIELDS:
            raise InvalidInputError(
                f"Invalid field '{field}'. Must be one of: {', '.join(EDITABLE_FIELDS)}",
                value=field,
                allowed=EDITABLE_FIELDS,
            )
        return self.with_updates(**{field: value})

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the local state document."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "eta": self.eta,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a Task from a state document entry."""
        category = data.get("category")
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            eta=str(data.get("eta", "")),
            category=None if category is None else str(category),
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the remote JSON API."""
        payload = self.to_dict()
        payload["categoryId"] = self.category_id
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Task:
        """Build a Task from a remote JSON object."""
        task = cls.from_dict(data)
        category_id = data.get("categoryId")
        if category_id is None:
            return task
        return Task(
            id=task.id,
            name=task.name,
            description=task.description,
            eta=task.eta,
            category=task.category,
            category_id=int(category_id),
        )


@dataclass(frozen=True)
class Category:
    """A named bucket tasks can be assigned to."""

    id: int
    name: str

    def with_name(self, name: str) -> Category:
        return Category(id=self.id, name=name)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Category:
        return cls(id=int(data["id"]), name=str(data["name"]))

    # The remote API uses the same shape for categories.
    to_payload = to_dict
    from_payload = from_dict
