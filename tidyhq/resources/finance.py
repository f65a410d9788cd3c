"""Deposits, expenses and invoices.

The three share list filtering by status and the same creation options.
A status of ``"all"`` is expanded to ``"activated,cancelled"``.
"""

from typing import Any, Optional, Union

from tidyhq.core.exceptions import ValidationException
from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]

LIST_KEYS = ["limit", "offset", "status", "updated_since"]
PAYMENT_KEYS = ["amount", "payment_type", "date"]
PAYMENT_TYPES = ("cash", "card", "cheque", "bank", "other")


class _FinanceAPI(ResourceAPI):
    collection = ""

    async def _list(self, operation: str, access_token: Optional[str], options: dict[str, Any]) -> list[dict[str, Any]]:
        if options.get("status") == "all":
            options["status"] = "activated,cancelled"
        query = self._query(LIST_KEYS, options)
        return await self._request(operation, "GET", f"/v1/{self.collection}{query}", access_token=access_token)

    async def _get(self, operation: str, item_id: Id, access_token: Optional[str]) -> dict[str, Any]:
        return await self._request(operation, "GET", f"/v1/{self.collection}/{item_id}", access_token=access_token)

    async def _create(
        self,
        operation: str,
        fields: dict[str, Any],
        description: Optional[str],
        metadata: Optional[Any],
        access_token: Optional[str],
    ) -> dict[str, Any]:
        body = {**fields, **self._compact({"description": description, "metadata": metadata})}
        return await self._request(operation, "POST", f"/v1/{self.collection}", body, access_token)

    async def _add_payment(
        self,
        operation: str,
        item_id: Id,
        amount: Optional[Any],
        payment_type: Optional[str],
        date: Optional[str],
        access_token: Optional[str],
    ) -> dict[str, Any]:
        if payment_type is not None and payment_type not in PAYMENT_TYPES:
            raise ValidationException(f"{self.resource}.{operation}: Invalid payment type {payment_type}.")

        options = {"amount": amount, "payment_type": payment_type, "date": date}
        self._require_fields(operation, options)
        query = self._query(PAYMENT_KEYS, options)
        return await self._request(
            operation, "POST", f"/v1/{self.collection}/{item_id}/payments{query}", {}, access_token
        )

    async def _delete(self, operation: str, item_id: Id, access_token: Optional[str]) -> bool:
        await self._request(operation, "DELETE", f"/v1/{self.collection}/{item_id}", access_token=access_token)
        return True


class DepositsAPI(_FinanceAPI):
    resource = "Deposits"
    collection = "deposits"

    async def get_deposits(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get deposits. Options: limit, offset, status (activated, cancelled, all), updated_since."""
        return await self._list("get_deposits", access_token, options)

    async def get_deposit(self, deposit_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._get("get_deposit", deposit_id, access_token)

    async def create_deposit(
        self,
        name: str,
        amount: Any,
        paid_date: str,
        category_id: Id,
        contact_id: Id,
        description: Optional[str] = None,
        metadata: Optional[Any] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        fields = {
            "name": name,
            "amount": amount,
            "paid_date": paid_date,
            "category_id": category_id,
            "contact_id": contact_id,
        }
        return await self._create("create_deposit", fields, description, metadata, access_token)


class ExpensesAPI(_FinanceAPI):
    resource = "Expenses"
    collection = "expenses"

    async def get_expenses(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get expenses. Options: limit, offset, status (activated, cancelled, all), updated_since."""
        return await self._list("get_expenses", access_token, options)

    async def get_expense(self, expense_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._get("get_expense", expense_id, access_token)

    async def create_expense(
        self,
        name: str,
        amount: Any,
        due_date: str,
        category_id: Id,
        contact_id: Id,
        description: Optional[str] = None,
        metadata: Optional[Any] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        fields = {
            "name": name,
            "amount": amount,
            "due_date": due_date,
            "category_id": category_id,
            "contact_id": contact_id,
        }
        return await self._create("create_expense", fields, description, metadata, access_token)

    async def add_payment(
        self,
        expense_id: Id,
        amount: Optional[Any] = None,
        payment_type: Optional[str] = None,
        date: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        return await self._add_payment("add_payment", expense_id, amount, payment_type, date, access_token)

    async def delete_expense(self, expense_id: Id, access_token: Optional[str] = None) -> bool:
        return await self._delete("delete_expense", expense_id, access_token)


class InvoicesAPI(_FinanceAPI):
    resource = "Invoices"
    collection = "invoices"

    async def get_invoices(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get invoices. Options: limit, offset, status (activated, cancelled, all), updated_since."""
        return await self._list("get_invoices", access_token, options)

    async def get_invoice(self, invoice_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._get("get_invoice", invoice_id, access_token)

    async def create_invoice(
        self,
        reference: str,
        amount: Any,
        included_tax_total: Any,
        pre_tax_amount: Any,
        due_date: str,
        category_id: Id,
        contact_id: Id,
        description: Optional[str] = None,
        metadata: Optional[Any] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Create an invoice for a contact.

        Args:
            reference: Invoice reference
            amount: Total amount
            included_tax_total: Tax included in the amount
            pre_tax_amount: Amount before tax
            due_date: Due date (ISO 8601)
            category_id: Category to file the invoice under
            contact_id: Contact being invoiced
            description: Optional description
            metadata: Optional metadata
            access_token: Token overriding the default
        """
        fields = {
            "reference": reference,
            "amount": amount,
            "included_tax_total": included_tax_total,
            "pre_tax_amount": pre_tax_amount,
            "due_date": due_date,
            "category_id": category_id,
            "contact_id": contact_id,
        }
        return await self._create("create_invoice", fields, description, metadata, access_token)

    async def add_payment(
        self,
        invoice_id: Id,
        amount: Optional[Any] = None,
        payment_type: Optional[str] = None,
        date: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Record a payment. payment_type is one of cash, card, cheque, bank, other."""
        return await self._add_payment("add_payment", invoice_id, amount, payment_type, date, access_token)

    async def delete_invoice(self, invoice_id: Id, access_token: Optional[str] = None) -> bool:
        return await self._delete("delete_invoice", invoice_id, access_token)
