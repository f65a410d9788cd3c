"""Contacts (v1)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

CONTACT_LIST_KEYS = [
    "limit",
    "offset",
    "search_terms",
    "show_all",
    "updated_since",
    "ids[]",
    "fields[]",
    "filter[[]]",
]


class ContactsAPI(ResourceAPI):
    """Read access to contacts."""

    resource = "Contacts"

    async def _get_contacts(
        self, path: str, access_token: Optional[str], options: dict[str, Any]
    ) -> list[dict[str, Any]]:
        query = self._query(CONTACT_LIST_KEYS, options)
        return await self._request("get_contacts", "GET", f"/v1/{path}{query}", access_token=access_token)

    async def get_contacts(
        self, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        """Get a list of contacts.

        Args:
            access_token: Token overriding the default
            **options: limit, offset, search_terms, show_all, updated_since,
                ids (list), fields (list), filter (list of dicts)

        Returns:
            List of contacts
        """
        return await self._get_contacts("contacts", access_token, options)

    async def get_contacts_in_group(
        self, group_id: Union[int, str], access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        """Get the contacts in a group. Accepts the same options as get_contacts."""
        return await self._get_contacts(f"groups/{group_id}/contacts", access_token, options)

    async def get_contact(
        self, contact_id: Union[int, str] = 0, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        """Get a single contact.

        Args:
            contact_id: Contact ID; 0 returns the contact of the authorizing user
            access_token: Token overriding the default
        """
        if contact_id in (0, "0"):
            contact_id = "me"
        return await self._request("get_contact", "GET", f"/v1/contacts/{contact_id}", access_token=access_token)
