"""OAuth helpers for obtaining TidyHQ access tokens."""

from typing import Any, Optional

import httpx

from tidyhq.core.config import get_settings
from tidyhq.core.exceptions import APIException, ConnectionException, ValidationException
from tidyhq.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)

CREDENTIAL_LENGTH = 64


def _require_string(operation: str, **values: Any) -> None:
    for name, value in values.items():
        if not isinstance(value, str):
            raise ValidationException(f"OAuth.{operation}: {name} must be a string.")


def _require_credential(operation: str, **values: str) -> None:
    for name, value in values.items():
        if len(value) != CREDENTIAL_LENGTH:
            raise ValidationException(
                f"OAuth.{operation}: {name} must be {CREDENTIAL_LENGTH} characters long."
            )


def _require_url(operation: str, redirect_uri: str) -> None:
    if not redirect_uri.startswith("http"):
        raise ValidationException(f"OAuth.{operation}: redirect_uri must be a valid URL.")


async def _send(
    operation: str,
    method: str,
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request to the accounts host and raise on failure."""
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=settings.request_timeout)

    try:
        response = await client.request(method, url, **kwargs)
    except httpx.RequestError as e:
        logger.error("oauth_request_failed", operation=operation, error=str(e))
        raise ConnectionException(f"OAuth.{operation}: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        logger.error("oauth_http_error", operation=operation, status=response.status_code)
        raise APIException(
            f"OAuth.{operation}: HTTP error {response.status_code}",
            status_code=response.status_code,
            details={"response": response.text[:1000]},
        )

    return response


async def authorize(
    client_id: str,
    redirect_uri: str,
    host: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """Start the authorization-code flow and return the authorize response.

    Args:
        client_id: Client ID of the application
        redirect_uri: Redirect URI registered for the application
        host: Accounts host (default from settings)
        client: httpx client to use (optional)

    Raises:
        ValidationException: If arguments are malformed
    """
    _require_string("authorize", client_id=client_id, redirect_uri=redirect_uri)
    _require_credential("authorize", client_id=client_id)
    _require_url("authorize", redirect_uri)

    host = host or settings.accounts_host
    response = await _send(
        "authorize",
        "GET",
        f"{host}/oauth/authorize",
        client=client,
        params={
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
        },
    )
    try:
        return response.json()
    except ValueError:
        return response.text


async def authorize_with_password(
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
    domain_prefix: str,
    host: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Obtain an access token with the password grant.

    Raises:
        ValidationException: If arguments are malformed
    """
    _require_string(
        "authorize_with_password",
        client_id=client_id,
        client_secret=client_secret,
        username=username,
        password=password,
        domain_prefix=domain_prefix,
    )
    _require_credential(
        "authorize_with_password", client_id=client_id, client_secret=client_secret
    )

    host = host or settings.accounts_host
    response = await _send(
        "authorize_with_password",
        "POST",
        f"{host}/oauth/token",
        client=client,
        json={
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
            "domain_prefix": domain_prefix,
            "grant_type": "password",
        },
    )
    logger.info("oauth_token_obtained", grant_type="password", domain_prefix=domain_prefix)
    return response.json()["access_token"]


async def request_access_token(
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    code: str,
    host: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Exchange an authorization code for an access token.

    Raises:
        ValidationException: If arguments are malformed
    """
    _require_string(
        "request_access_token",
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
        code=code,
    )
    _require_credential(
        "request_access_token", client_id=client_id, client_secret=client_secret
    )
    _require_url("request_access_token", redirect_uri)

    host = host or settings.accounts_host
    response = await _send(
        "request_access_token",
        "POST",
        f"{host}/oauth/token",
        client=client,
        json={
            "client_id": client_id,
            "client_secret": client_secret,
            "redirect_uri": redirect_uri,
            "code": code,
            "grant_type": "authorization_code",
        },
    )
    logger.info("oauth_token_obtained", grant_type="authorization_code")
    return response.json()["access_token"]
