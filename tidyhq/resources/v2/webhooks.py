"""Webhook subscriptions (v2)."""

from typing import Any, Optional

from tidyhq.resources.base import ResourceAPI


class V2WebhooksAPI(ResourceAPI):
    """Manage the webhook subscriptions whose deliveries WebhookEndpoint verifies."""

    resource = "V2.Webhooks"

    async def get_webhooks(self, access_token: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request("get_webhooks", "GET", "/v2/webhooks", access_token=access_token)

    async def get_webhook(self, webhook_id: str, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_webhook", "GET", f"/v2/webhooks/{webhook_id}", access_token=access_token)

    async def create_webhook(
        self,
        url: str,
        matching_kind: str,
        description: str,
        allow_state_changes: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Subscribe a URL to an event kind.

        Args:
            url: Delivery URL
            matching_kind: Event kind to listen for (e.g. "contact.updated")
            description: Human-readable description
            allow_state_changes: Keep the webhook active across state changes
            access_token: Token overriding the default

        Returns:
            The new webhook, including its signing key
        """
        body = {
            "url": url,
            "matching_kind": matching_kind,
            "description": description,
            **self._compact({"allow_state_changes": allow_state_changes}),
        }
        return await self._request("create_webhook", "POST", "/v2/webhooks", body, access_token)

    async def activate_webhook(self, webhook_id: str, access_token: Optional[str] = None) -> bool:
        return await self._succeeded("activate_webhook", "POST", f"/v2/webhooks/{webhook_id}/activate", access_token)

    async def deactivate_webhook(self, webhook_id: str, access_token: Optional[str] = None) -> bool:
        return await self._succeeded(
            "deactivate_webhook", "POST", f"/v2/webhooks/{webhook_id}/deactivate", access_token
        )

    async def delete_webhook(self, webhook_id: str, access_token: Optional[str] = None) -> bool:
        return await self._succeeded("delete_webhook", "DELETE", f"/v2/webhooks/{webhook_id}", access_token)
