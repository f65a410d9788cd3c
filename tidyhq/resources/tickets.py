"""Event tickets (v1)."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]

TICKET_KEYS = ["amount", "initial_quantity", "maximum_purchase", "sales_end"]


class TicketsAPI(ResourceAPI):
    resource = "Tickets"

    async def get_tickets(self, event_id: Id, access_token: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request("get_tickets", "GET", f"/v1/events/{event_id}/tickets", access_token=access_token)

    async def get_sold_tickets(self, event_id: Id, access_token: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request(
            "get_sold_tickets", "GET", f"/v1/events/{event_id}/tickets/sold", access_token=access_token
        )

    async def create_ticket(
        self, event_id: Id, name: str, access_token: Optional[str] = None, **options: Any
    ) -> dict[str, Any]:
        """Create a ticket type for an event.

        Args:
            event_id: Event ID
            name: Ticket type name
            access_token: Token overriding the default
            **options: amount, initial_quantity, maximum_purchase, sales_end
        """
        query = self._query(["name", *TICKET_KEYS], {"name": name, **options})
        return await self._request(
            "create_ticket", "POST", f"/v1/events/{event_id}/tickets{query}", {}, access_token
        )

    async def update_ticket(
        self, event_id: Id, ticket_id: Id, access_token: Optional[str] = None, **options: Any
    ) -> dict[str, Any]:
        """Update a ticket type. Options: name, amount, initial_quantity, maximum_purchase, sales_end."""
        self._require_fields("update_ticket", options)
        query = self._query(["name", *TICKET_KEYS], options)
        return await self._request(
            "update_ticket", "PUT", f"/v1/events/{event_id}/tickets/{ticket_id}{query}", {}, access_token
        )

    async def delete_ticket(self, event_id: Id, ticket_id: Id, access_token: Optional[str] = None) -> bool:
        await self._request(
            "delete_ticket", "DELETE", f"/v1/events/{event_id}/tickets/{ticket_id}", {}, access_token
        )
        return True
