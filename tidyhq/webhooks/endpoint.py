"""Verification and dispatch of inbound TidyHQ webhook deliveries."""

import asyncio
import base64
import binascii
import hmac
import json
import re
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Union

from tidyhq.core.config import get_settings
from tidyhq.core.exceptions import (
    ConfigurationException,
    HeaderParseError,
    HttpMethodMismatchError,
    NoSignaturesError,
    PayloadDecodeError,
    SignatureMismatchError,
    StaleTimestampError,
    WebhookIdMismatchError,
    WebhookVerificationError,
)
from tidyhq.core.logging import get_logger
from tidyhq.webhooks.models import InboundWebhookMessage
from tidyhq.webhooks.signature import (
    DEFAULT_SCHEME,
    Body,
    compute_signature,
    parse_header,
    serialize_body,
)

logger = get_logger(__name__)

DEFAULT_TOLERANCE = 300
DEFAULT_MAX_WORKERS = 4

EventHandler = Callable[[Any], Any]

_WHITESPACE = re.compile(r"\s+")


def decode_signing_key(signing_key: str) -> bytes:
    """Decode a base64 signing key.

    Accepts the standard and URL-safe alphabets, embedded whitespace and
    missing padding.

    Raises:
        binascii.Error: If the key contains characters outside both alphabets
    """
    normalized = _WHITESPACE.sub("", signing_key).replace("-", "+").replace("_", "/").rstrip("=")
    normalized += "=" * (-len(normalized) % 4)
    return base64.b64decode(normalized, validate=True)


class WebhookEndpoint:
    """Listens for and acts on deliveries for one TidyHQ webhook.

    Example:
        endpoint = WebhookEndpoint(webhook_id, signing_key)

        @endpoint.on("contact.updated")
        def contact_updated(data):
            ...

        message = endpoint.verify(signature_header, raw_body)
    """

    def __init__(
        self,
        webhook_id: str,
        signing_key: str,
        tolerance: int = DEFAULT_TOLERANCE,
        match_any_signature: bool = False,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        """Initialize webhook endpoint.

        Args:
            webhook_id: ID of the webhook subscription this endpoint serves
            signing_key: Base64-encoded signing key shown when the webhook was created
            tolerance: Maximum accepted message age in seconds (0 disables the check)
            match_any_signature: Accept a delivery if any listed signature matches,
                instead of only the first one
            max_workers: Worker threads for verify_and_handle outside an event loop

        Raises:
            ConfigurationException: If the signing key is not valid base64
        """
        self.webhook_id = webhook_id
        self.signing_key = signing_key
        self.tolerance = tolerance
        self.match_any_signature = match_any_signature

        try:
            self._key_bytes = decode_signing_key(signing_key)
        except (binascii.Error, ValueError) as e:
            raise ConfigurationException(
                "Webhook signing key is not valid base64",
                details={"webhook_id": webhook_id},
            ) from e

        self._callbacks: dict[str, EventHandler] = {}
        self._lock = threading.RLock()
        self._pending: set[Union[asyncio.Task, Future]] = set()
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    @classmethod
    def from_settings(cls) -> "WebhookEndpoint":
        """Build an endpoint from TIDYHQ_WEBHOOK_* settings.

        Raises:
            ConfigurationException: If webhook ID or signing key is not configured
        """
        settings = get_settings()
        if not settings.webhook_configured:
            raise ConfigurationException(
                "TIDYHQ_WEBHOOK_ID and TIDYHQ_WEBHOOK_SIGNING_KEY must be set"
            )
        return cls(
            settings.webhook_id,  # type: ignore[arg-type]
            settings.webhook_signing_key,  # type: ignore[arg-type]
            tolerance=settings.webhook_tolerance,
        )

    # Callback registry

    def register_callback(self, kind: str, handler: EventHandler) -> None:
        """Register the handler for an event kind, replacing any existing one."""
        with self._lock:
            replaced = kind in self._callbacks
            self._callbacks[kind] = handler

        logger.debug("webhook_callback_registered", kind=kind, replaced=replaced)

    def unregister_callback(self, kind: str) -> None:
        with self._lock:
            self._callbacks.pop(kind, None)

    def on(self, kind: str) -> Callable[[EventHandler], EventHandler]:
        """Decorator form of register_callback."""

        def decorator(handler: EventHandler) -> EventHandler:
            self.register_callback(kind, handler)
            return handler

        return decorator

    def get_callback(self, kind: str) -> Optional[EventHandler]:
        with self._lock:
            return self._callbacks.get(kind)

    # Dispatch

    def handle_event(self, kind: str, data: Any) -> None:
        """Route one event to its registered handler.

        Handler exceptions propagate to the caller. Events without a
        handler are logged and dropped.
        """
        handler = self.get_callback(kind)
        if handler is None:
            logger.info("webhook_event_unhandled", kind=kind, data=data)
            return

        logger.debug("webhook_event_dispatching", kind=kind)
        handler(data)

    # Verification

    def verify(
        self,
        signature_header: Optional[str],
        body: Body,
        http_method: str = "POST",
    ) -> InboundWebhookMessage:
        """Verify a delivery from TidyHQ.

        Args:
            signature_header: Signature header as received
            body: Raw request body (str or bytes), or the already decoded JSON object
            http_method: HTTP method the delivery was received with

        Returns:
            The verified webhook message

        Raises:
            HeaderParseError: Header missing or without timestamp
            NoSignaturesError: No v1 signatures in header
            SignatureMismatchError: Signature does not match the payload
            StaleTimestampError: Message older than the tolerance window
            WebhookIdMismatchError: Message is for a different webhook
            HttpMethodMismatchError: Message recorded a different HTTP method
            PayloadDecodeError: Signed body is not valid JSON, or a mapping body
                cannot be serialized
        """
        details = parse_header(signature_header, DEFAULT_SCHEME)

        if details is None or not details.has_timestamp:
            raise HeaderParseError(details={"header": signature_header})

        if not details.signatures:
            raise NoSignaturesError(details={"scheme": DEFAULT_SCHEME})

        timestamp = details.timestamp
        payload = serialize_body(body)
        expected_signature = compute_signature(self._key_bytes, timestamp, payload)

        candidates = details.signatures if self.match_any_signature else details.signatures[:1]
        if not any(
            hmac.compare_digest(candidate.encode("utf-8"), expected_signature.encode("utf-8"))
            for candidate in candidates
        ):
            raise SignatureMismatchError(details={"timestamp": timestamp})

        age = int(time.time()) - timestamp
        if self.tolerance > 0 and age > self.tolerance:
            raise StaleTimestampError(age=age, tolerance=self.tolerance)

        if isinstance(body, (str, bytes)):
            try:
                message = json.loads(payload)
            except ValueError as e:
                raise PayloadDecodeError(details={"error": str(e)}) from e
            if not isinstance(message, dict):
                raise PayloadDecodeError("Webhook body is not a JSON object")
        else:
            message = body

        if message.get("webhook_id") != self.webhook_id:
            raise WebhookIdMismatchError(self.webhook_id, message.get("webhook_id"))

        if message.get("http_method") != http_method:
            raise HttpMethodMismatchError(http_method, message.get("http_method"))

        logger.debug(
            "webhook_verified",
            webhook_id=self.webhook_id,
            kind=message.get("kind"),
            age=age,
        )
        return message  # type: ignore[return-value]

    def verify_and_handle(
        self,
        signature_header: Optional[str],
        body: Body,
        http_method: str = "POST",
    ) -> Union[asyncio.Task, Future]:
        """Verify a delivery and dispatch it without blocking the caller.

        Never raises. Failures are logged and dropped. Inside a running event
        loop the work runs as a detached task; otherwise it runs on the
        endpoint's worker threads.

        Returns:
            The asyncio task or thread future running the work
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            future = self._get_executor().submit(
                self._verify_and_dispatch, signature_header, body, http_method
            )
            self._track(future)
            return future

        task = loop.create_task(
            self._verify_and_dispatch_async(signature_header, body, http_method)
        )
        self._track(task)
        return task

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker threads used by verify_and_handle.

        Args:
            wait: Block until queued deliveries have been handled
        """
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="tidyhq-webhook",
                )
            return self._executor

    def _track(self, work: Union[asyncio.Task, Future]) -> None:
        with self._lock:
            self._pending.add(work)
        work.add_done_callback(self._on_done)

    async def _verify_and_dispatch_async(
        self,
        signature_header: Optional[str],
        body: Body,
        http_method: str,
    ) -> None:
        self._verify_and_dispatch(signature_header, body, http_method)

    def _verify_and_dispatch(
        self,
        signature_header: Optional[str],
        body: Body,
        http_method: str,
    ) -> None:
        try:
            message = self.verify(signature_header, body, http_method)
        except WebhookVerificationError as e:
            logger.error(
                "webhook_verification_failed",
                webhook_id=self.webhook_id,
                header=signature_header,
                http_method=http_method,
                error_type=type(e).__name__,
                error=e.message,
                details=e.details,
            )
            return
        except Exception as e:
            logger.error(
                "webhook_verification_failed",
                webhook_id=self.webhook_id,
                header=signature_header,
                http_method=http_method,
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            return

        kind = message.get("kind", "")
        try:
            self.handle_event(kind, message.get("data"))
        except Exception as e:
            logger.error(
                "webhook_handler_failed",
                webhook_id=self.webhook_id,
                kind=kind,
                error=str(e),
                exc_info=True,
            )

    def _on_done(self, work: Union[asyncio.Task, Future]) -> None:
        with self._lock:
            self._pending.discard(work)
        if work.cancelled():
            logger.warning("webhook_task_cancelled", webhook_id=self.webhook_id)
            return

        error = work.exception()
        if error is not None:
            logger.error(
                "webhook_task_failed",
                webhook_id=self.webhook_id,
                error=str(error),
            )
