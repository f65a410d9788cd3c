"""Events (v1)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]

EVENT_LIST_KEYS = ["limit", "offset", "start_at", "end_at", "public"]


class EventsAPI(ResourceAPI):
    """Events of the organization, and of organizations in its association."""

    resource = "Events"

    async def _get_events(self, path: str, access_token: Optional[str], options: dict[str, Any]) -> list[dict[str, Any]]:
        query = self._query(EVENT_LIST_KEYS, options)
        return await self._request("get_events", "GET", f"/v1/{path}{query}", access_token=access_token)

    async def get_events(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get events.

        Args:
            access_token: Token overriding the default
            **options: limit, offset, start_at, end_at (ISO 8601), public (bool)
        """
        return await self._get_events("events", access_token, options)

    async def get_organization_events(
        self, organization_id: Id, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        return await self._get_events(f"association/organizations/{organization_id}/events", access_token, options)

    async def get_event(self, event_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_event", "GET", f"/v1/events/{event_id}", access_token=access_token)

    async def get_organization_event(
        self, organization_id: Id, event_id: Id, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "get_event",
            "GET",
            f"/v1/association/organizations/{organization_id}/events/{event_id}",
            access_token=access_token,
        )

    async def create_event(
        self,
        name: str,
        start_at: str,
        access_token: Optional[str] = None,
        **fields: Any,
    ) -> dict[str, Any]:
        """Create an event.

        Args:
            name: Event name
            start_at: Start time (ISO 8601)
            access_token: Token overriding the default
            **fields: end_at, body, location, archived, hidden, category_id
        """
        body = {"name": name, "start_at": start_at, **self._compact(fields)}
        return await self._request("create_event", "POST", "/v1/events", body, access_token)

    async def update_event(
        self, event_id: Id, access_token: Optional[str] = None, **fields: Any
    ) -> dict[str, Any]:
        """Update an event. Accepts name, start_at and the create_event fields.

        Raises:
            ValidationException: If no field is given
        """
        self._require_fields("update_event", fields)
        return await self._request(
            "update_event", "PUT", f"/v1/events/{event_id}", self._compact(fields), access_token
        )

    async def delete_event(self, event_id: Id, access_token: Optional[str] = None) -> bool:
        await self._request("delete_event", "DELETE", f"/v1/events/{event_id}", {}, access_token)
        return True
