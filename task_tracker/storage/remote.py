"""Remote HTTP backend.

Every operation is a single request against the task service; nothing is
cached between operations. Listing is the exception to the one-request
rule: tasks reference categories by id, so each distinct id is looked up
once while grouping.

Example:
    >>> config = TrackerConfig(mode="remote", base_url="https://tasks.example.com", api_key="k")
    >>> with RemoteBackend(config) as backend:
    ...     backend.create_task("Write report", "Quarterly numbers", "Friday")

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, TypeVar

from task_tracker.exceptions import InvalidInputError, RemoteFailureError, TrackerError
from task_tracker.models import EDITABLE_FIELDS, Category, Task
from task_tracker.registry import group_by_category
from task_tracker.storage.base import Backend
from task_tracker.themes import validate_theme
from task_tracker.utils.http import HTTPClient, HTTPResponse

if TYPE_CHECKING:
    import httpx

    from task_tracker.config import TrackerConfig

logger = logging.getLogger(__name__)

NO_CATEGORY = "No Category"
UNKNOWN_CATEGORY = "Unknown"

# Id sent on creates; the service allocates the real one.
PLACEHOLDER_ID = 0

T = TypeVar("T", Task, Category)


class RemoteBackend(Backend):
    """Backend that mirrors each operation onto the remote task service.

    Request bodies are the JSON forms of Task and Category, with one
    exception: ``edit_task`` PUTs a partial object holding only ``id`` and
    the edited field, e.g. ``{"id": 3, "eta": "Monday"}``. The service must
    merge it into the stored task. Sending a full task would need a GET
    first, and every operation here is a single request.
    """

    uncategorized_label = NO_CATEGORY

    def __init__(
        self,
        config: TrackerConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = HTTPClient(config, transport=transport)

    # -- tasks -------------------------------------------------------------

    def create_task(self, name: str, description: str, eta: str) -> Task:
        task = Task(id=PLACEHOLDER_ID, name=name, description=description, eta=eta)
        self._http.post("/tasks", json_data=task.to_payload(), expected_status=201)
        return task

    def edit_task(self, task_id: int, field: str, value: str) -> None:
        # The service only sees the edited field, so it is checked here.
        if field not in EDITABLE_FIELDS:
            raise InvalidInputError(
                f"Invalid field '{field}'. Must be one of: {', '.join(EDITABLE_FIELDS)}",
                value=field,
                allowed=EDITABLE_FIELDS,
            )
        self._http.put(f"/tasks/{task_id}", json_data={"id": task_id, field: value})

    def delete_task(self, task_id: int) -> None:
        self._http.delete(f"/tasks/{task_id}")

    def assign_category(self, task_id: int, category_id: int) -> str | None:
        self._http.post(
            f"/tasks/{task_id}/assign-category",
            json_data={"categoryId": category_id},
        )
        return None

    def list_tasks(self) -> list[Task]:
        response = self._http.get("/tasks")
        return self._parse_list(response, Task)

    def list_tasks_grouped(self) -> dict[str, list[Task]]:
        tasks = self.list_tasks()
        names: dict[int, str] = {}

        def label(task: Task) -> Optional[str]:
            if task.category_id is None:
                return task.category
            if task.category_id not in names:
                names[task.category_id] = self._category_name(task.category_id)
            return names[task.category_id]

        return group_by_category(tasks, label, NO_CATEGORY)

    # -- categories --------------------------------------------------------

    def create_category(self, name: str) -> Category:
        category = Category(id=PLACEHOLDER_ID, name=name)
        self._http.post("/categories", json_data=category.to_payload(), expected_status=201)
        return category

    def edit_category(self, category_id: int, name: str) -> None:
        self._http.put(
            f"/categories/{category_id}",
            json_data=Category(id=category_id, name=name).to_payload(),
        )

    def delete_category(self, category_id: int) -> None:
        self._http.delete(f"/categories/{category_id}")

    def list_categories(self) -> list[Category]:
        response = self._http.get("/categories")
        return self._parse_list(response, Category)

    def get_category(self, category_id: int) -> Category:
        response = self._http.get(f"/categories/{category_id}")
        if not isinstance(response.data, dict):
            raise RemoteFailureError(response.status_code, str(response.data))
        try:
            return Category.from_payload(response.data)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteFailureError(response.status_code, str(response.data)) from e

    def _category_name(self, category_id: int) -> str:
        try:
            return self.get_category(category_id).name
        except TrackerError as e:
            logger.warning("Category %d lookup failed: %s", category_id, e)
            return UNKNOWN_CATEGORY

    # -- theme -------------------------------------------------------------

    def get_theme(self) -> str:
        response = self._http.get("/theme")
        data = response.data
        if isinstance(data, dict):
            data = data.get("theme")
        if not isinstance(data, str):
            raise RemoteFailureError(response.status_code, str(response.data))
        return data

    def change_theme(self, name: str) -> str:
        theme = validate_theme(name)
        self._http.post("/theme", json_data={"newTheme": theme.value})
        return theme.value

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _parse_list(response: HTTPResponse, model: type[T]) -> list[T]:
        """Parse a JSON array of Task or Category objects."""
        if not isinstance(response.data, list):
            raise RemoteFailureError(response.status_code, str(response.data))
        try:
            return [model.from_payload(item) for item in response.data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RemoteFailureError(response.status_code, str(response.data)) from e

    def close(self) -> None:
        self._http.close()
