"""Organization (v1), Shop and Transactions."""

from typing import Any, Optional, Union

from tidyhq.resources.base import ResourceAPI

Id = Union[int, str]


class OrganizationAPI(ResourceAPI):
    resource = "Organization"

    async def get_organization(self, access_token: Optional[str] = None) -> dict[str, Any]:
        """Get the organization the access token belongs to."""
        return await self._request("get_organization", "GET", "/v1/organization", access_token=access_token)


class ShopAPI(ResourceAPI):
    resource = "Shop"

    async def get_products(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        query = self._query(["limit", "offset"], options)
        return await self._request("get_products", "GET", f"/v1/shop/products{query}", access_token=access_token)

    async def get_product(self, product_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request(
            "get_product", "GET", f"/v1/shop/products/{product_id}", access_token=access_token
        )

    async def get_shipping_options(
        self, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        query = self._query(["limit", "offset"], options)
        return await self._request(
            "get_shipping_options", "GET", f"/v1/shop/shipping_options{query}", access_token=access_token
        )

    async def get_shipping_option(self, shipping_option_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request(
            "get_shipping_option",
            "GET",
            f"/v1/shop/shipping_options/{shipping_option_id}",
            access_token=access_token,
        )

    async def get_orders(self, access_token: Optional[str] = None, **options: Any) -> list[dict[str, Any]]:
        """Get shop orders. Options: limit, offset, created_since, status."""
        query = self._query(["limit", "offset", "created_since", "status"], options)
        return await self._request("get_orders", "GET", f"/v1/shop/orders{query}", access_token=access_token)

    async def get_order(self, order_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request("get_order", "GET", f"/v1/shop/orders/{order_id}", access_token=access_token)


class TransactionsAPI(ResourceAPI):
    resource = "Transactions"

    async def get_transactions(self, access_token: Optional[str] = None) -> list[dict[str, Any]]:
        return await self._request("get_transactions", "GET", "/v1/transactions", access_token=access_token)

    async def get_transaction(self, transaction_id: Id, access_token: Optional[str] = None) -> dict[str, Any]:
        return await self._request(
            "get_transaction", "GET", f"/v1/transactions/{transaction_id}", access_token=access_token
        )
