"""TidyHQ v2 API wrappers."""

from tidyhq.client.rest import Rest
from tidyhq.resources.v2.contacts import V2ContactsAPI
from tidyhq.resources.v2.memberships import V2MembershipLevelsAPI, V2MembershipsAPI
from tidyhq.resources.v2.organization import V2OrganizationAPI
from tidyhq.resources.v2.webhooks import V2WebhooksAPI


class V2:
    """Groups the v2 resource wrappers over one shared transport."""

    def __init__(self, rest: Rest) -> None:
        self.rest = rest

        self.contacts = V2ContactsAPI(rest)
        self.membership_levels = V2MembershipLevelsAPI(rest)
        self.memberships = V2MembershipsAPI(rest)
        self.organization = V2OrganizationAPI(rest)
        self.webhooks = V2WebhooksAPI(rest)


__all__ = [
    "V2",
    "V2ContactsAPI",
    "V2MembershipLevelsAPI",
    "V2MembershipsAPI",
    "V2OrganizationAPI",
    "V2WebhooksAPI",
]
