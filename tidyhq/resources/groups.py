"""Groups (v1)."""

from typing import Any, Optional, Union

from tidyhq.core.exceptions import NotFoundException
from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]

GROUP_LIST_KEYS = ["limit", "offset", "search_terms"]


class GroupsAPI(ResourceAPI):
    resource = "Groups"

    async def get_groups(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get groups. Options: limit, offset, search_terms."""
        query = self._query(GROUP_LIST_KEYS, options)
        return await self._request("get_groups", "GET", f"/v1/groups{query}", access_token=access_token)

    async def get_groups_for_contact(
        self, contact_id: Id, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        query = self._query(GROUP_LIST_KEYS, options)
        return await self._request(
            "get_groups_for_contact", "GET", f"/v1/contacts/{contact_id}/groups{query}", access_token=access_token
        )

    async def get_group(self, group_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_group", "GET", f"/v1/groups/{group_id}", access_token=access_token)

    async def get_group_by_name(self, name: str, access_token: Optional[str] = None) -> dict[str, Any]:
        """Find a group by its label.

        Raises:
            NotFoundException: If no group has that label
        """
        for group in await self.get_groups(access_token=access_token):
            if group.get("label") == name:
                return group
        raise NotFoundException(f"{self.resource}.get_group_by_name: Group with name {name} not found.")

    async def create_group(
        self, name: str, description: Optional[str] = None, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"label": name}
        if description:
            body["description"] = description
        return await self._request("create_group", "POST", "/v1/groups", body, access_token)

    async def update_group(
        self,
        group_id: Id,
        name: Optional[str] = None,
        description: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Change the label or description of a group."""
        fields = {"label": name, "description": description}
        self._require_fields("update_group", fields)
        query = self._query(["label", "description"], fields)
        return await self._request(
            "update_group", "PUT", f"/v1/groups/{group_id}{query}", self._compact(fields), access_token
        )

    async def delete_group(self, group_id: Id, access_token: Optional[str] = None) -> bool:
        await self._request("delete_group", "DELETE", f"/v1/groups/{group_id}", {}, access_token)
        return True

    async def add_contact_to_group(self, group_id: Id, contact_id: Id, access_token: Optional[str] = None) -> bool:
        await self._request(
            "add_contact_to_group", "PUT", f"/v1/groups/{group_id}/contacts/{contact_id}", {}, access_token
        )
        return True

    async def remove_contact_from_group(
        self, group_id: Id, contact_id: Id, access_token: Optional[str] = None
    ) -> bool:
        await self._request(
            "remove_contact_from_group", "DELETE", f"/v1/groups/{group_id}/contacts/{contact_id}", {}, access_token
        )
        return True
