"""Shared plumbing for TidyHQ resource wrappers."""

from typing import Any, Mapping, Optional, Sequence

from tidyhq.client.builder import make_url_parameters
from tidyhq.client.rest import Rest
from tidyhq.core.exceptions import TidyHQException, ValidationException
from tidyhq.core.logging import get_logger

logger = get_logger(__name__)


class ResourceAPI:
    """Base class for resource wrappers: call, unwrap, raise."""

    resource = ""

    def __init__(self, rest: Rest) -> None:
        """Initialize resource wrapper.

        Args:
            rest: Shared REST transport
        """
        self.rest = rest

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        body: Optional[Any] = None,
        access_token: Optional[str] = None,
    ) -> Any:
        """Call the API and return the response payload.

        Raises:
            APIException: If the API answered with an error status
            ConnectionException: If the request could not be sent
        """
        try:
            response = await self.rest.perform(method, path, body, access_token)
        except TidyHQException as e:
            e.details.setdefault("operation", f"{self.resource}.{operation}")
            logger.error(
                "api_call_failed",
                operation=f"{self.resource}.{operation}",
                error=e.message,
            )
            raise
        return response.data

    async def _succeeded(
        self,
        operation: str,
        method: str,
        path: str,
        access_token: Optional[str] = None,
    ) -> bool:
        """Call an endpoint that answers 204 on success; report success as a bool.

        Any other status, and any API or connection error, reports False.
        """
        try:
            response = await self.rest.perform(method, path, {}, access_token)
        except TidyHQException as e:
            logger.warning(
                "api_call_unsuccessful",
                operation=f"{self.resource}.{operation}",
                error=e.message,
            )
            return False
        return response.status == 204

    @staticmethod
    def _query(keys: Sequence[str], options: Mapping[str, Any]) -> str:
        return make_url_parameters(keys, options)

    def _require_fields(self, operation: str, fields: Mapping[str, Any]) -> None:
        if not any(value is not None for value in fields.values()):
            raise ValidationException(f"{self.resource}.{operation}: No options provided.")

    @staticmethod
    def _compact(fields: Mapping[str, Any]) -> dict[str, Any]:
        """Drop options the caller did not set."""
        return {key: value for key, value in fields.items() if value is not None}
