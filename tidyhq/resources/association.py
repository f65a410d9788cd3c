"""Association (organizations belonging to an association)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]


class AssociationAPI(ResourceAPI):
    resource = "Association"

    async def get_organizations(self, access_token: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request(
            "get_organizations", "GET", "/v1/association/organizations", access_token=access_token
        )

    async def get_organization(self, organization_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request(
            "get_organization",
            "GET",
            f"/v1/association/organizations/{organization_id}",
            access_token=access_token,
        )

    async def get_organization_contacts(
        self, organization_id: Id, access_token: Optional[str] = None
    ) -> list[dict[str, Any]]:
        return await self._request(
            "get_organization_contacts",
            "GET",
            f"/v1/association/organizations/{organization_id}/contacts",
            access_token=access_token,
        )

    async def get_organization_events(
        self, organization_id: Id, access_token: Optional[str] = None
    ) -> list[dict[str, Any]]:
        return await self._request(
            "get_organization_events",
            "GET",
            f"/v1/association/organizations/{organization_id}/events",
            access_token=access_token,
        )

    async def get_organization_event(
        self, organization_id: Id, event_id: Id, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "get_organization_event",
            "GET",
            f"/v1/association/organizations/{organization_id}/events/{event_id}",
            access_token=access_token,
        )

    async def get_organization_meetings(
        self, organization_id: Id, access_token: Optional[str] = None
    ) -> list[dict[str, Any]]:
        return await self._request(
            "get_organization_meetings",
            "GET",
            f"/v1/association/organizations/{organization_id}/meetings",
            access_token=access_token,
        )

    async def get_organization_meeting(
        self, organization_id: Id, meeting_id: Id, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "get_organization_meeting",
            "GET",
            f"/v1/association/organizations/{organization_id}/meetings/{meeting_id}",
            access_token=access_token,
        )
