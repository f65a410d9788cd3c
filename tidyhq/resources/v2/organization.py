"""Organization (v2)."""

from typing import Any, Optional

from tidyhq.resources.base import ResourceAPI

PAGE_KEYS = ["limit", "offset", "updated_since", "updated_before"]


class V2OrganizationAPI(ResourceAPI):
    resource = "V2.Organization"

    async def get_organization(self, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_organization", "GET", "/v2/organization", access_token=access_token)

    async def get_admins(self, access_token: Optional[str] = None, **options: Any) -> Any:
        """Get organization admins. Options: limit, offset, updated_since, updated_before."""
        query = self._query(PAGE_KEYS, options)
        return await self._request("get_admins", "GET", f"/v2/organization/admins{query}", access_token=access_token)

    async def get_roles(self, access_token: Optional[str] = None, **options: Any) -> Any:
        """Get organization roles. Options: limit, offset, updated_since, updated_before."""
        query = self._query(PAGE_KEYS, options)
        return await self._request("get_roles", "GET", f"/v2/organization/roles{query}", access_token=access_token)
