"""Entry point for the TidyHQ REST API."""

from typing import Any, Optional

from tidyhq.client.rest import Rest
from tidyhq.resources import (
    AssociationAPI,
    CategoriesAPI,
    ContactsAPI,
    CustomFieldsAPI,
    DepositsAPI,
    EmailsAPI,
    EventsAPI,
    ExpensesAPI,
    GroupsAPI,
    InvoicesAPI,
    MeetingsAPI,
    MembershipLevelsAPI,
    MembershipsAPI,
    OrganizationAPI,
    ShopAPI,
    TasksAPI,
    TicketsAPI,
    TransactionsAPI,
)
from tidyhq.resources.v2 import V2


class TidyHQ:
    """Client for the TidyHQ API.

    Example:
        >>> async with TidyHQ(access_token) as thq:
        ...     me = await thq.contacts.get_contact()
        ...     hooks = await thq.v2.webhooks.get_webhooks()
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        host: Optional[str] = None,
        rest: Optional[Rest] = None,
    ) -> None:
        """Initialize client.

        Args:
            access_token: Default bearer token (default from settings)
            host: API base URL (default from settings)
            rest: Preconfigured transport (optional)
        """
        self.rest = rest or Rest(access_token=access_token, host=host)

        self.association = AssociationAPI(self.rest)
        self.categories = CategoriesAPI(self.rest)
        self.contacts = ContactsAPI(self.rest)
        self.custom_fields = CustomFieldsAPI(self.rest)
        self.deposits = DepositsAPI(self.rest)
        self.emails = EmailsAPI(self.rest)
        self.events = EventsAPI(self.rest)
        self.expenses = ExpensesAPI(self.rest)
        self.groups = GroupsAPI(self.rest)
        self.invoices = InvoicesAPI(self.rest)
        self.meetings = MeetingsAPI(self.rest)
        self.memberships = MembershipsAPI(self.rest)
        self.membership_levels = MembershipLevelsAPI(self.rest)
        self.organization = OrganizationAPI(self.rest)
        self.shop = ShopAPI(self.rest)
        self.tasks = TasksAPI(self.rest)
        self.tickets = TicketsAPI(self.rest)
        self.transactions = TransactionsAPI(self.rest)

        self.v2 = V2(self.rest)

    async def __aenter__(self) -> "TidyHQ":
        """Enter async context manager."""
        await self.rest.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        await self.rest.close()
