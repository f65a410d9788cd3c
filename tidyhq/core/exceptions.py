"""Custom exceptions for the TidyHQ client."""

from typing import Any, Optional


class TidyHQException(Exception):
    """Base exception for all TidyHQ client errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        """Initialize exception with message and optional details.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationException(TidyHQException):
    """Configuration error."""

    pass


class ValidationException(TidyHQException):
    """Invalid arguments passed to a wrapper."""

    pass


class ConnectionException(TidyHQException):
    """Connection to the TidyHQ API failed."""

    pass


class APIException(TidyHQException):
    """The TidyHQ API answered with an error status."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            message: Error message
            status_code: HTTP status code
            details: Additional error details
        """
        super().__init__(message, details)
        self.status_code = status_code


class NotFoundException(APIException):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found", details: dict | None = None) -> None:
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404, details=details)


class UnauthorizedException(APIException):
    """Unauthorized access."""

    def __init__(self, message: str = "Unauthorized", details: dict | None = None) -> None:
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401, details=details)


class WebhookVerificationError(TidyHQException):
    """An inbound webhook delivery failed verification."""

    pass


class HeaderParseError(WebhookVerificationError):
    """Signature header missing, not a string, or without a timestamp."""

    def __init__(
        self,
        message: str = "Unable to extract timestamp and signatures from header",
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)


class NoSignaturesError(WebhookVerificationError):
    """Header parsed but carried no signature for the expected scheme."""

    def __init__(
        self,
        message: str = "No signatures found with expected scheme",
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)


class SignatureMismatchError(WebhookVerificationError):
    """Computed signature differs from the provided one."""

    def __init__(self, message: str = "Signature mismatch", details: dict | None = None) -> None:
        super().__init__(message, details)


class StaleTimestampError(WebhookVerificationError):
    """Delivery timestamp is older than the tolerance window."""

    def __init__(self, age: int, tolerance: int) -> None:
        super().__init__(
            "Timestamp outside the tolerance zone",
            details={"age": age, "tolerance": tolerance},
        )
        self.age = age
        self.tolerance = tolerance


class _MismatchError(WebhookVerificationError):
    field_label = ""

    def __init__(self, expected: Any, received: Any) -> None:
        super().__init__(
            f"There has been a {self.field_label} mismatch, expected {expected} got {received}",
            details={"expected": expected, "received": received},
        )
        self.expected = expected
        self.received = received


class WebhookIdMismatchError(_MismatchError):
    """Payload targets a different webhook than the configured one."""

    field_label = "webhook ID"


class HttpMethodMismatchError(_MismatchError):
    """Payload was recorded under a different HTTP method."""

    field_label = "HTTP method"


class PayloadDecodeError(WebhookVerificationError):
    """Signed body is not valid JSON."""

    def __init__(self, message: str = "Webhook body is not valid JSON", details: Optional[dict] = None) -> None:
        super().__init__(message, details)
