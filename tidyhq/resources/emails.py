"""Emails (v1)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI


class EmailsAPI(ResourceAPI):
    resource = "Emails"

    async def get_emails(self, access_token: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request("get_emails", "GET", "/v1/emails", access_token=access_token)

    async def get_email(self, email_id: Union[int, str], access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_email", "GET", f"/v1/emails/{email_id}", access_token=access_token)

    async def create_email(self, email: dict[str, Any], access_token: Optional[str] = None) -> dict[str, Any]:
        """Send an email.

        Args:
            email: Email definition (subject, body, contacts, ...)
            access_token: Token overriding the default
        """
        return await self._request("create_email", "POST", "/v1/emails", email, access_token)
