"""Meetings (v1)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]


class MeetingsAPI(ResourceAPI):
    resource = "Meetings"

    async def get_meetings(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get meetings. Options: limit, offset."""
        query = self._query(["limit", "offset"], options)
        return await self._request("get_meetings", "GET", f"/v1/meetings{query}", access_token=access_token)

    async def get_organization_meetings(
        self, organization_id: Id, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        query = self._query(["limit", "offset"], options)
        return await self._request(
            "get_meetings",
            "GET",
            f"/v1/association/organizations/{organization_id}/meetings{query}",
            access_token=access_token,
        )

    async def get_meeting(self, meeting_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_meeting", "GET", f"/v1/meetings/{meeting_id}", access_token=access_token)

    async def get_organization_meeting(
        self, organization_id: Id, meeting_id: Id, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "get_organization_meeting",
            "GET",
            f"/v1/association/organizations/{organization_id}/meetings/{meeting_id}",
            access_token=access_token,
        )
