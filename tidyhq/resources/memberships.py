"""Memberships and membership levels (v1)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]

MEMBERSHIP_LIST_KEYS = ["limit", "offset", "active", "updated_since"]


class MembershipLevelsAPI(ResourceAPI):
    resource = "MembershipLevels"

    async def get_membership_levels(
        self, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        """Get membership levels. Options: limit, offset."""
        query = self._query(["limit", "offset"], options)
        return await self._request(
            "get_membership_levels", "GET", f"/v1/membership_levels{query}", access_token=access_token
        )

    async def get_membership_level(
        self, membership_level_id: Id, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "get_membership_level",
            "GET",
            f"/v1/membership_levels/{membership_level_id}",
            access_token=access_token,
        )

    async def get_pricing_variations(
        self, membership_level_id: Id, access_token: Optional[str] = None
    ) -> list[dict[str, Any]]:
        return await self._request(
            "get_pricing_variations",
            "GET",
            f"/v1/membership_levels/{membership_level_id}/pricing_variations",
            access_token=access_token,
        )


class MembershipsAPI(ResourceAPI):
    resource = "Memberships"

    async def _get_memberships(
        self, path: str, access_token: Optional[str], options: dict[str, Any]
    ) -> list[dict[str, Any]]:
        query = self._query(MEMBERSHIP_LIST_KEYS, options)
        return await self._request("get_memberships", "GET", f"/v1/{path}{query}", access_token=access_token)

    async def get_memberships(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get memberships. Options: limit, offset, active, updated_since."""
        return await self._get_memberships("memberships", access_token, options)

    async def get_memberships_for_contact(
        self, contact_id: Id, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        return await self._get_memberships(f"contacts/{contact_id}/memberships", access_token, options)

    async def get_memberships_for_membership_level(
        self, membership_level_id: Id, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        return await self._get_memberships(
            f"membership_levels/{membership_level_id}/memberships", access_token, options
        )

    async def get_membership(self, membership_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request(
            "get_membership", "GET", f"/v1/memberships/{membership_id}", access_token=access_token
        )
