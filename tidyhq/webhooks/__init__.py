"""Inbound webhook verification and dispatch."""

from tidyhq.webhooks.endpoint import WebhookEndpoint
from tidyhq.webhooks.models import InboundWebhookMessage, ParsedSignatureHeader
from tidyhq.webhooks.signature import build_header, compute_signature, parse_header

__all__ = [
    "InboundWebhookMessage",
    "ParsedSignatureHeader",
    "WebhookEndpoint",
    "build_header",
    "compute_signature",
    "parse_header",
]
