"""Custom fields and their dropdown choices."""

from typing import Any, Optional, Union

from tidyhq.core.exceptions import NotFoundException, ValidationException
from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]

FIELD_TYPES = ("string", "text", "dropdown", "boolean", "date")


class CustomFieldsAPI(ResourceAPI):
    resource = "CustomFields"

    def _check_type(self, operation: str, field_type: str) -> None:
        if field_type not in FIELD_TYPES:
            raise ValidationException(f"{self.resource}.{operation}: Invalid type {field_type}.")

    async def get_custom_fields(self, access_token: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request("get_custom_fields", "GET", "/v1/custom_fields", access_token=access_token)

    async def get_custom_field(self, custom_field_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request(
            "get_custom_field", "GET", f"/v1/custom_fields/{custom_field_id}", access_token=access_token
        )

    async def get_custom_field_by_name(self, name: str, access_token: Optional[str] = None) -> dict[str, Any]:
        """Find a custom field by its title.

        Raises:
            NotFoundException: If no custom field has that title
        """
        fields = await self.get_custom_fields(access_token=access_token)
        for field in fields:
            if field.get("title") == name:
                return field
        raise NotFoundException(
            f"{self.resource}.get_custom_field_by_name: Custom field with name {name} does not exist."
        )

    async def create_custom_field(
        self, name: str, field_type: str, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        """Create a custom field.

        Args:
            name: Title of the field
            field_type: One of string, text, dropdown, boolean, date
            access_token: Token overriding the default
        """
        self._check_type("create_custom_field", field_type)
        return await self._request(
            "create_custom_field",
            "POST",
            "/v1/custom_fields",
            {"title": name, "type": field_type},
            access_token,
        )

    async def update_custom_field(
        self,
        custom_field_id: Id,
        name: Optional[str] = None,
        field_type: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Rename a custom field or change its type."""
        if field_type is not None:
            self._check_type("update_custom_field", field_type)
        self._require_fields("update_custom_field", {"title": name, "type": field_type})

        query = self._query(["title", "type"], {"title": name, "type": field_type})
        return await self._request(
            "update_custom_field",
            "PUT",
            f"/v1/custom_fields/{custom_field_id}{query}",
            {},
            access_token,
        )

    async def delete_custom_field(self, custom_field_id: Id, access_token: Optional[str] = None) -> bool:
        await self._request(
            "delete_custom_field", "DELETE", f"/v1/custom_fields/{custom_field_id}", access_token=access_token
        )
        return True

    async def get_custom_field_choices(
        self, custom_field_id: Id, access_token: Optional[str] = None
    ) -> list[dict[str, Any]]:
        return await self._request(
            "get_custom_field_choices",
            "GET",
            f"/v1/custom_fields/{custom_field_id}/choices",
            access_token=access_token,
        )

    async def get_custom_field_choice(
        self, custom_field_id: Id, choice_id: Id, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "get_custom_field_choice",
            "GET",
            f"/v1/custom_fields/{custom_field_id}/choices/{choice_id}",
            access_token=access_token,
        )

    async def create_custom_field_choice(
        self, custom_field_id: Id, name: str, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "create_custom_field_choice",
            "POST",
            f"/v1/custom_fields/{custom_field_id}/choices",
            {"title": name},
            access_token,
        )

    async def update_custom_field_choice(
        self, custom_field_id: Id, choice_id: Id, name: str, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        query = self._query(["title"], {"title": name})
        return await self._request(
            "update_custom_field_choice",
            "PUT",
            f"/v1/custom_fields/{custom_field_id}/choices/{choice_id}{query}",
            {},
            access_token,
        )

    async def delete_custom_field_choice(
        self, custom_field_id: Id, choice_id: Id, access_token: Optional[str] = None
    ) -> bool:
        await self._request(
            "delete_custom_field_choice",
            "DELETE",
            f"/v1/custom_fields/{custom_field_id}/choices/{choice_id}",
            access_token=access_token,
        )
        return True
