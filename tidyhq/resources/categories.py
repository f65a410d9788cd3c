"""Categories (v1)."""

from typing import Any, Optional

from tidyhq.resources.base import ResourceAPI


class CategoriesAPI(ResourceAPI):
    resource = "Categories"

    async def get_categories(
        self, access_token: Optional[str] = None, **options: Any
    ) -> list[dict[str, Any]]:
        """Get categories. Options: limit, offset."""
        query = self._query(["limit", "offset"], options)
        return await self._request("get_categories", "GET", f"/v1/categories{query}", access_token=access_token)
