"""TidyHQ v1 API wrappers."""

from tidyhq.resources.association import AssociationAPI
from tidyhq.resources.base import ResourceAPI
from tidyhq.resources.categories import CategoriesAPI
from tidyhq.resources.contacts import ContactsAPI
from tidyhq.resources.custom_fields import CustomFieldsAPI
from tidyhq.resources.emails import EmailsAPI
from tidyhq.resources.events import EventsAPI
from tidyhq.resources.finance import DepositsAPI, ExpensesAPI, InvoicesAPI
from tidyhq.resources.groups import GroupsAPI
from tidyhq.resources.meetings import MeetingsAPI
from tidyhq.resources.memberships import MembershipLevelsAPI, MembershipsAPI
from tidyhq.resources.organization import OrganizationAPI, ShopAPI, TransactionsAPI
from tidyhq.resources.tasks import TasksAPI
from tidyhq.resources.tickets import TicketsAPI

__all__ = [
    "AssociationAPI",
    "CategoriesAPI",
    "ContactsAPI",
    "CustomFieldsAPI",
    "DepositsAPI",
    "EmailsAPI",
    "EventsAPI",
    "ExpensesAPI",
    "GroupsAPI",
    "InvoicesAPI",
    "MeetingsAPI",
    "MembershipLevelsAPI",
    "MembershipsAPI",
    "OrganizationAPI",
    "ResourceAPI",
    "ShopAPI",
    "TasksAPI",
    "TicketsAPI",
    "TransactionsAPI",
]
