"""Contacts (v2)."""

from typing import Any, Optional

from tidyhq.resources.base import ResourceAPI

CONTACT_LIST_KEYS = [
    "updated_before",
    "updated_since",
    "limit",
    "offset",
    "registered",
    "all",
    "ids[]",
    "scope",
    "search_terms",
    "filter_equals[][]",
]

CONTACT_MEMBERSHIP_KEYS = ["updated_before", "updated_since", "limit", "offset"]


class V2ContactsAPI(ResourceAPI):
    resource = "V2.Contacts"

    async def get_contacts(self, access_token: Optional[str] = None, **options: Any) -> Any:
        """Get a page of contacts.

        Args:
            access_token: Token overriding the default
            **options: updated_before, updated_since, limit, offset, registered,
                all, ids (list), scope ("contact_id_number" or
                "sports_australia_connect"), search_terms,
                filter_equals (dict of field to value)
        """
        query = self._query(CONTACT_LIST_KEYS, options)
        return await self._request("get_contacts", "GET", f"/v2/contacts{query}", access_token=access_token)

    async def create_contact(self, contact: dict[str, Any], access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("create_contact", "POST", "/v2/contacts", contact, access_token)

    async def get_contact(self, contact_id: str = "me", access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_contact", "GET", f"/v2/contacts/{contact_id}", access_token=access_token)

    async def update_contact(
        self, contact_id: str, contact: dict[str, Any], access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request("update_contact", "PATCH", f"/v2/contacts/{contact_id}", contact, access_token)

    async def create_contact_note(
        self, contact_id: str, note: str, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        return await self._request(
            "create_contact_note", "POST", f"/v2/contacts/{contact_id}/notes", {"text": note}, access_token
        )

    async def delete_contact_note(self, contact_id: str, note_id: str, access_token: Optional[str] = None) -> None:
        await self._request(
            "delete_contact_note", "DELETE", f"/v2/contacts/{contact_id}/notes/{note_id}", {}, access_token
        )

    async def get_contact_memberships(
        self, contact_id: str, access_token: Optional[str] = None, **options: Any
    ) -> Any:
        """Get the memberships of a contact. Options: updated_before, updated_since, limit, offset."""
        query = self._query(CONTACT_MEMBERSHIP_KEYS, options)
        return await self._request(
            "get_contact_memberships",
            "GET",
            f"/v2/contacts/{contact_id}/memberships{query}",
            access_token=access_token,
        )
