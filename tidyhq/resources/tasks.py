"""Tasks (v1)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]


class TasksAPI(ResourceAPI):
    resource = "Tasks"

    async def _get_tasks(self, path: str, access_token: Optional[str], options: dict[str, Any]) -> list[dict[str, Any]]:
        query = self._query(["limit", "offset", "completed"], options)
        return await self._request("get_tasks", "GET", f"/v1/{path}{query}", access_token=access_token)

    async def get_tasks(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get tasks. Options: limit, offset, completed."""
        return await self._get_tasks("tasks", access_token, options)

    async def get_contact_tasks(
        self, contact_id: Id, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        return await self._get_tasks(f"contacts/{contact_id}/tasks", access_token, options)

    async def get_task(self, task_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_task", "GET", f"/v1/tasks/{task_id}", access_token=access_token)

    async def create_task(
        self,
        contact_id: Id,
        title: str,
        due_date: str,
        description: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        body = {"contact_id": contact_id, "title": title, "due_date": due_date}
        body.update(self._compact({"description": description}))
        return await self._request("create_task", "POST", "/v1/tasks", body, access_token)

    async def update_task(self, task_id: Id, access_token: Optional[str] = None, **fields: Any) -> dict[str, Any]:
        """Update a task. Fields: contact_id, title, due_date, description, completed."""
        self._require_fields("update_task", fields)
        return await self._request("update_task", "PUT", f"/v1/tasks/{task_id}", self._compact(fields), access_token)

    async def delete_task(self, task_id: Id, access_token: Optional[str] = None) -> bool:
        await self._request("delete_task", "DELETE", f"/v1/tasks/{task_id}", {}, access_token)
        return True
