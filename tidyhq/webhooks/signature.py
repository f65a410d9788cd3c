"""Signature header parsing and HMAC computation for TidyHQ webhooks.

TidyHQ signs each delivery with a header of the form::

    t=<unix-seconds>,v1=<hex-hmac>[,v1=<hex-hmac>...]

The signature is an HMAC-SHA256 over ``"<t>.<body>"`` keyed with the
base64-decoded signing key of the webhook.
"""

import hashlib
import hmac
import json
from typing import Any, Iterable, Mapping, Optional, Union

from tidyhq.core.exceptions import PayloadDecodeError
from tidyhq.webhooks.models import MISSING_TIMESTAMP, ParsedSignatureHeader

DEFAULT_SCHEME = "v1"

Body = Union[str, bytes, Mapping[str, Any]]


def parse_header(header: Any, scheme: str = DEFAULT_SCHEME) -> Optional[ParsedSignatureHeader]:
    """Parse a signature header into its timestamp and signatures.

    Args:
        header: Raw header value, possibly None
        scheme: Signature scheme tag to collect (e.g. "v1")

    Returns:
        Parsed header, or None if the header is not a string
    """
    if not isinstance(header, str):
        return None

    timestamp = MISSING_TIMESTAMP
    signatures: list[str] = []

    for item in header.split(","):
        key, sep, value = item.partition("=")
        if not sep:
            continue

        if key == "t":
            try:
                timestamp = int(value, 10)
            except ValueError:
                pass
        elif key == scheme:
            signatures.append(value)

    return ParsedSignatureHeader(timestamp=timestamp, signatures=tuple(signatures))


def serialize_body(body: Body) -> bytes:
    """Return the exact bytes that were signed for a delivery body.

    Raw bodies (str or bytes) are used verbatim. Mappings are serialized the
    way TidyHQ serializes JSON: compact separators, non-ASCII kept as is.

    Raises:
        PayloadDecodeError: If a mapping body cannot be serialized to JSON
    """
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    try:
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise PayloadDecodeError(
            "Webhook body cannot be serialized to JSON",
            details={"error": str(e)},
        ) from e


def compute_signature(signing_key: bytes, timestamp: int, payload: Union[str, bytes]) -> str:
    """Compute the hex HMAC-SHA256 of a timestamped payload.

    Args:
        signing_key: Raw (base64-decoded) signing key
        timestamp: Unix timestamp from the header
        payload: Serialized body

    Returns:
        Hex-encoded signature
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    timestamped_payload = f"{timestamp}.".encode("ascii") + payload
    return hmac.new(signing_key, timestamped_payload, hashlib.sha256).hexdigest()


def build_header(
    timestamp: int,
    signatures: Iterable[str],
    scheme: str = DEFAULT_SCHEME,
) -> str:
    """Build a signature header value."""
    parts = [f"t={timestamp}"]
    parts.extend(f"{scheme}={signature}" for signature in signatures)
    return ",".join(parts)
