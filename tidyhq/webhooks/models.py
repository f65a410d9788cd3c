"""Value types for webhook verification."""

from dataclasses import dataclass
from typing import Any, TypedDict

MISSING_TIMESTAMP = -1


@dataclass(frozen=True)
class ParsedSignatureHeader:
    """Timestamp and candidate signatures extracted from one header."""

    timestamp: int = MISSING_TIMESTAMP
    signatures: tuple[str, ...] = ()

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp != MISSING_TIMESTAMP


class InboundWebhookMessage(TypedDict, total=False):
    """Webhook message as delivered by TidyHQ."""

    id: str
    webhook_id: str
    http_method: str
    kind: str
    data: Any
    created_at: str
