"""Python client for the TidyHQ API, with webhook verification."""

__version__ = "0.1.0"

from tidyhq.client import Rest, TidyHQ  # noqa: E402
from tidyhq.core.exceptions import (  # noqa: E402
    APIException,
    HeaderParseError,
    HttpMethodMismatchError,
    NoSignaturesError,
    SignatureMismatchError,
    StaleTimestampError,
    TidyHQException,
    WebhookIdMismatchError,
    WebhookVerificationError,
)
from tidyhq.webhooks import WebhookEndpoint  # noqa: E402

__all__ = [
    "APIException",
    "HeaderParseError",
    "HttpMethodMismatchError",
    "NoSignaturesError",
    "Rest",
    "SignatureMismatchError",
    "StaleTimestampError",
    "TidyHQ",
    "TidyHQException",
    "WebhookEndpoint",
    "WebhookIdMismatchError",
    "WebhookVerificationError",
]
