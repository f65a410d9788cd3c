"""Memberships and membership levels (v2)."""

from typing import Any, Optional

from tidyhq.resources.base import ResourceAPI


class V2MembershipLevelsAPI(ResourceAPI):
    resource = "V2.MembershipLevels"

    async def get_membership_levels(self, access_token: Optional[str] = None, **options: Any) -> Any:
        """Get membership levels. Options: updated_before, updated_since, limit, offset, all."""
        query = self._query(["updated_before", "updated_since", "limit", "offset", "all"], options)
        return await self._request(
            "get_membership_levels", "GET", f"/v2/membership_levels{query}", access_token=access_token
        )

    async def create_membership(
        self, membership_level_id: str, subscription: dict[str, Any], access_token: Optional[str] = None
    ) -> dict[str, Any]:
        """Subscribe a contact to a membership level.

        Returns:
            The subscription, membership, payment URL and invoice ID
        """
        return await self._request(
            "create_membership",
            "POST",
            f"/v2/membership_levels/{membership_level_id}/subscriptions",
            subscription,
            access_token,
        )


class V2MembershipsAPI(ResourceAPI):
    resource = "V2.Memberships"

    async def get_memberships(self, access_token: Optional[str] = None, **options: Any) -> Any:
        """Get memberships. Options: updated_before, updated_since, limit, offset, all, active."""
        query = self._query(["updated_before", "updated_since", "limit", "offset", "all", "active"], options)
        return await self._request("get_memberships", "GET", f"/v2/memberships{query}", access_token=access_token)

    async def get_membership(self, membership_id: str, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request(
            "get_membership", "GET", f"/v2/memberships/{membership_id}", access_token=access_token
        )

    async def renew_subscription_for_membership(
        self, membership_id: str, subscription: dict[str, Any], access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "renew_subscription_for_membership",
            "POST",
            f"/v2/memberships/{membership_id}/subscriptions",
            subscription,
            access_token,
        )
