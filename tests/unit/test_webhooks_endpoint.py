"""Tests for webhook verification and dispatch."""

import asyncio
import base64
import json
import threading
from concurrent.futures import Future
from typing import Iterator

import pytest
from pytest_mock import MockerFixture

from tidyhq.core.config import Settings
from tidyhq.core.exceptions import (
    ConfigurationException,
    HeaderParseError,
    HttpMethodMismatchError,
    NoSignaturesError,
    PayloadDecodeError,
    SignatureMismatchError,
    StaleTimestampError,
    WebhookIdMismatchError,
)
from tidyhq.webhooks.endpoint import WebhookEndpoint
from tidyhq.webhooks.signature import build_header, compute_signature, serialize_body

NOW = 1_700_000_000
WEBHOOK_ID = "wh_12345"
KEY_BYTES = b"super-secret-signing-key"
SIGNING_KEY = base64.b64encode(KEY_BYTES).decode("ascii")


def make_message(**overrides) -> dict:
    message = {
        "id": "msg_1",
        "webhook_id": WEBHOOK_ID,
        "http_method": "POST",
        "kind": "contact.updated",
        "data": {"id": 42, "first_name": "Ada"},
        "created_at": "2024-01-01T00:00:00Z",
    }
    message.update(overrides)
    return message


def sign(body, timestamp: int = NOW) -> str:
    signature = compute_signature(KEY_BYTES, timestamp, serialize_body(body))
    return build_header(timestamp, [signature])


@pytest.fixture
def frozen_time(mocker: MockerFixture) -> None:
    mocker.patch("tidyhq.webhooks.endpoint.time.time", return_value=float(NOW))


@pytest.fixture
def endpoint() -> Iterator[WebhookEndpoint]:
    webhook_endpoint = WebhookEndpoint(WEBHOOK_ID, SIGNING_KEY)
    yield webhook_endpoint
    webhook_endpoint.shutdown()


# verify


def test_verify_dict_body(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a correctly signed decoded body is returned unchanged."""
    message = make_message()

    result = endpoint.verify(sign(message), message)

    assert result is message


def test_verify_raw_body(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a raw string body is verified verbatim and decoded."""
    raw = json.dumps(make_message(), indent=2)

    result = endpoint.verify(sign(raw), raw)

    assert result["kind"] == "contact.updated"
    assert result["data"] == {"id": 42, "first_name": "Ada"}


def test_verify_bytes_body(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a raw bytes body is accepted."""
    raw = json.dumps(make_message()).encode("utf-8")

    result = endpoint.verify(sign(raw), raw)

    assert result["webhook_id"] == WEBHOOK_ID


def test_verify_tampered_body(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a body changed after signing is rejected."""
    header = sign(make_message())

    with pytest.raises(SignatureMismatchError) as exc_info:
        endpoint.verify(header, make_message(data={"id": 43}))

    assert exc_info.value.message == "Signature mismatch"


def test_verify_wrong_key(frozen_time: None) -> None:
    """Test a delivery signed with another key is rejected."""
    other = WebhookEndpoint(WEBHOOK_ID, base64.b64encode(b"another-key").decode())
    message = make_message()

    with pytest.raises(SignatureMismatchError):
        other.verify(sign(message), message)


def test_verify_only_first_signature_counts(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a valid signature after an invalid first one is rejected."""
    message = make_message()
    good = compute_signature(KEY_BYTES, NOW, serialize_body(message))
    header = build_header(NOW, ["0" * 64, good])

    with pytest.raises(SignatureMismatchError):
        endpoint.verify(header, message)


def test_verify_match_any_signature(frozen_time: None) -> None:
    """Test opting in to any-signature matching accepts a later valid signature."""
    endpoint = WebhookEndpoint(WEBHOOK_ID, SIGNING_KEY, match_any_signature=True)
    message = make_message()
    good = compute_signature(KEY_BYTES, NOW, serialize_body(message))
    header = build_header(NOW, ["0" * 64, good])

    assert endpoint.verify(header, message) is message


def test_verify_missing_header(endpoint: WebhookEndpoint) -> None:
    """Test a missing header is a parse error."""
    with pytest.raises(HeaderParseError) as exc_info:
        endpoint.verify(None, make_message())

    assert exc_info.value.message == "Unable to extract timestamp and signatures from header"


def test_verify_header_without_timestamp(endpoint: WebhookEndpoint) -> None:
    """Test a header lacking t= is a parse error."""
    with pytest.raises(HeaderParseError):
        endpoint.verify("v1=abcdef", make_message())


def test_verify_header_without_signatures(endpoint: WebhookEndpoint) -> None:
    """Test a header with only other schemes has no signatures."""
    with pytest.raises(NoSignaturesError) as exc_info:
        endpoint.verify(f"t={NOW},v0=abcdef", make_message())

    assert exc_info.value.message == "No signatures found with expected scheme"


def test_verify_stale_timestamp(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a correctly signed message older than the tolerance is rejected."""
    message = make_message()
    timestamp = NOW - 301

    with pytest.raises(StaleTimestampError) as exc_info:
        endpoint.verify(sign(message, timestamp), message)

    assert exc_info.value.age == 301
    assert exc_info.value.tolerance == 300
    assert exc_info.value.message == "Timestamp outside the tolerance zone"


def test_verify_within_tolerance(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a message just inside the tolerance is accepted."""
    message = make_message()

    assert endpoint.verify(sign(message, NOW - 299), message) is message


def test_verify_at_tolerance_boundary(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test age equal to the tolerance is still accepted."""
    message = make_message()

    assert endpoint.verify(sign(message, NOW - 300), message) is message


def test_verify_future_timestamp_accepted(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test timestamps in the future are not rejected."""
    message = make_message()

    assert endpoint.verify(sign(message, NOW + 600), message) is message


def test_verify_tolerance_disabled(frozen_time: None) -> None:
    """Test tolerance of zero disables the replay check."""
    endpoint = WebhookEndpoint(WEBHOOK_ID, SIGNING_KEY, tolerance=0)
    message = make_message()

    assert endpoint.verify(sign(message, NOW - 86400), message) is message


def test_verify_signature_checked_before_timestamp(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a stale message with a bad signature reports the signature."""
    message = make_message()
    header = build_header(NOW - 1000, ["0" * 64])

    with pytest.raises(SignatureMismatchError):
        endpoint.verify(header, message)


def test_verify_webhook_id_mismatch(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a message for another webhook is rejected."""
    message = make_message(webhook_id="wh_other")

    with pytest.raises(WebhookIdMismatchError) as exc_info:
        endpoint.verify(sign(message), message)

    assert exc_info.value.expected == WEBHOOK_ID
    assert exc_info.value.received == "wh_other"
    assert exc_info.value.message == (
        "There has been a webhook ID mismatch, expected wh_12345 got wh_other"
    )


def test_verify_http_method_mismatch(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test the recorded HTTP method must match the received one."""
    message = make_message(http_method="PUT")

    with pytest.raises(HttpMethodMismatchError) as exc_info:
        endpoint.verify(sign(message), message, "POST")

    assert exc_info.value.expected == "POST"
    assert exc_info.value.received == "PUT"


def test_verify_custom_http_method(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a non-POST delivery verifies when methods agree."""
    message = make_message(http_method="PUT")

    assert endpoint.verify(sign(message), message, "PUT") is message


def test_verify_invalid_json_body(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a correctly signed body that is not JSON is rejected."""
    raw = "not json"

    with pytest.raises(PayloadDecodeError):
        endpoint.verify(sign(raw), raw)


def test_verify_non_object_json_body(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a JSON body that is not an object is rejected."""
    raw = "[1, 2, 3]"

    with pytest.raises(PayloadDecodeError):
        endpoint.verify(sign(raw), raw)


def test_invalid_signing_key() -> None:
    """Test a signing key that is not base64 is a configuration error."""
    with pytest.raises(ConfigurationException):
        WebhookEndpoint(WEBHOOK_ID, "not base64!!")


def test_unpadded_signing_key(frozen_time: None) -> None:
    """Test keys without base64 padding are accepted."""
    endpoint = WebhookEndpoint(WEBHOOK_ID, "c2VjcmV0MQ")
    message = make_message()
    header = build_header(NOW, [compute_signature(b"secret1", NOW, serialize_body(message))])

    assert endpoint.verify(header, message) is message


def test_urlsafe_signing_key() -> None:
    """Test keys in the URL-safe alphabet with whitespace decode to the same bytes."""
    raw = bytes(range(250, 256)) * 3
    urlsafe = base64.urlsafe_b64encode(raw).decode("ascii")
    spaced = f" {urlsafe[:8]}\n{urlsafe[8:]} "

    assert "-" in urlsafe or "_" in urlsafe
    assert WebhookEndpoint(WEBHOOK_ID, spaced)._key_bytes == raw


def test_verify_non_utf8_body_unsigned(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test an undecodable body with a bad signature is a signature mismatch."""
    with pytest.raises(SignatureMismatchError):
        endpoint.verify(f"t={NOW},v1=00", b"\xff\xfe")


def test_verify_non_utf8_body_signed(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a correctly signed undecodable body is a payload error."""
    with pytest.raises(PayloadDecodeError):
        endpoint.verify(sign(b"\xff\xfe"), b"\xff\xfe")


def test_verify_unserializable_mapping(endpoint: WebhookEndpoint, frozen_time: None) -> None:
    """Test a decoded body that cannot be re-serialized is a payload error."""
    with pytest.raises(PayloadDecodeError):
        endpoint.verify(f"t={NOW},v1=00", make_message(data={"at": object()}))


def test_from_settings(mocker: MockerFixture) -> None:
    """Test endpoint is built from TIDYHQ_WEBHOOK_* settings."""
    settings = Settings(
        _env_file=None,  # type: ignore
        TIDYHQ_WEBHOOK_ID=WEBHOOK_ID,
        TIDYHQ_WEBHOOK_SIGNING_KEY=SIGNING_KEY,
        TIDYHQ_WEBHOOK_TOLERANCE=60,
    )
    mocker.patch("tidyhq.webhooks.endpoint.get_settings", return_value=settings)

    endpoint = WebhookEndpoint.from_settings()

    assert endpoint.webhook_id == WEBHOOK_ID
    assert endpoint.tolerance == 60


def test_from_settings_unconfigured(mocker: MockerFixture) -> None:
    """Test missing webhook settings raise a configuration error."""
    settings = Settings(_env_file=None)  # type: ignore
    mocker.patch("tidyhq.webhooks.endpoint.get_settings", return_value=settings)

    with pytest.raises(ConfigurationException):
        WebhookEndpoint.from_settings()


# callbacks


def test_handle_event_routes_to_handler(endpoint: WebhookEndpoint, mocker: MockerFixture) -> None:
    """Test events reach the handler registered for their kind only."""
    contact_handler = mocker.Mock()
    invoice_handler = mocker.Mock()
    endpoint.register_callback("contact.updated", contact_handler)
    endpoint.register_callback("invoice.created", invoice_handler)

    endpoint.handle_event("contact.updated", {"id": 1})

    contact_handler.assert_called_once_with({"id": 1})
    invoice_handler.assert_not_called()


def test_handle_event_unregistered_kind(endpoint: WebhookEndpoint, mocker: MockerFixture) -> None:
    """Test events without a handler are logged and dropped."""
    mock_logger = mocker.patch("tidyhq.webhooks.endpoint.logger")

    endpoint.handle_event("contact.deleted", {"id": 1})

    mock_logger.info.assert_called_once_with(
        "webhook_event_unhandled", kind="contact.deleted", data={"id": 1}
    )


def test_handle_event_handler_error_propagates(endpoint: WebhookEndpoint) -> None:
    """Test handler exceptions reach the caller of handle_event."""

    def failing(data) -> None:
        raise RuntimeError("boom")

    endpoint.register_callback("contact.updated", failing)

    with pytest.raises(RuntimeError, match="boom"):
        endpoint.handle_event("contact.updated", {})


def test_register_callback_replaces(endpoint: WebhookEndpoint, mocker: MockerFixture) -> None:
    """Test registering twice keeps only the latest handler."""
    first = mocker.Mock()
    second = mocker.Mock()
    endpoint.register_callback("contact.updated", first)
    endpoint.register_callback("contact.updated", second)

    endpoint.handle_event("contact.updated", {"id": 1})

    first.assert_not_called()
    second.assert_called_once_with({"id": 1})


def test_unregister_callback(endpoint: WebhookEndpoint, mocker: MockerFixture) -> None:
    """Test unregistered kinds stop dispatching."""
    handler = mocker.Mock()
    endpoint.register_callback("contact.updated", handler)
    endpoint.unregister_callback("contact.updated")
    endpoint.unregister_callback("never.registered")

    endpoint.handle_event("contact.updated", {})

    handler.assert_not_called()
    assert endpoint.get_callback("contact.updated") is None


def test_on_decorator(endpoint: WebhookEndpoint) -> None:
    """Test decorator registers and returns the function."""
    received = []

    @endpoint.on("contact.updated")
    def handler(data) -> None:
        received.append(data)

    endpoint.handle_event("contact.updated", {"id": 7})

    assert endpoint.get_callback("contact.updated") is handler
    assert received == [{"id": 7}]


# verify_and_handle


def test_verify_and_handle_without_loop(
    endpoint: WebhookEndpoint, frozen_time: None, mocker: MockerFixture
) -> None:
    """Test dispatch runs on a worker thread when no event loop is running."""
    handler = mocker.Mock()
    endpoint.register_callback("contact.updated", handler)
    message = make_message()

    future = endpoint.verify_and_handle(sign(message), message)

    assert isinstance(future, Future)
    future.result(timeout=5)
    handler.assert_called_once_with({"id": 42, "first_name": "Ada"})


def test_verify_and_handle_does_not_block_caller(
    endpoint: WebhookEndpoint, frozen_time: None
) -> None:
    """Test the caller returns before a slow handler finishes."""
    release = threading.Event()
    finished = threading.Event()
    caller = threading.current_thread()
    handler_threads = []

    def slow_handler(data) -> None:
        handler_threads.append(threading.current_thread())
        release.wait(timeout=5)
        finished.set()

    endpoint.register_callback("contact.updated", slow_handler)
    message = make_message()

    future = endpoint.verify_and_handle(sign(message), message)

    assert not finished.is_set()
    assert not future.done()

    release.set()
    future.result(timeout=5)

    assert finished.is_set()
    assert handler_threads and handler_threads[0] is not caller


def test_verify_and_handle_logs_verification_failure(
    endpoint: WebhookEndpoint, frozen_time: None, mocker: MockerFixture
) -> None:
    """Test verification failures are logged and not raised."""
    mock_logger = mocker.patch("tidyhq.webhooks.endpoint.logger")
    handler = mocker.Mock()
    endpoint.register_callback("contact.updated", handler)

    endpoint.verify_and_handle("t=1,v1=bad", make_message()).result(timeout=5)

    handler.assert_not_called()
    mock_logger.error.assert_called_once()
    args, kwargs = mock_logger.error.call_args
    assert args == ("webhook_verification_failed",)
    assert kwargs["error_type"] == "SignatureMismatchError"


def test_verify_and_handle_non_utf8_body(
    endpoint: WebhookEndpoint, frozen_time: None, mocker: MockerFixture
) -> None:
    """Test an undecodable body is logged as a verification failure."""
    mock_logger = mocker.patch("tidyhq.webhooks.endpoint.logger")

    future = endpoint.verify_and_handle(sign(b"\xff\xfe"), b"\xff\xfe")
    future.result(timeout=5)

    args, kwargs = mock_logger.error.call_args
    assert args == ("webhook_verification_failed",)
    assert kwargs["error_type"] == "PayloadDecodeError"


def test_verify_and_handle_unexpected_error_logged(
    endpoint: WebhookEndpoint, mocker: MockerFixture
) -> None:
    """Test errors outside the verification hierarchy are logged too."""
    mock_logger = mocker.patch("tidyhq.webhooks.endpoint.logger")
    mocker.patch.object(endpoint, "verify", side_effect=RuntimeError("unexpected"))

    future = endpoint.verify_and_handle("t=1,v1=a", b"{}")
    future.result(timeout=5)

    args, kwargs = mock_logger.error.call_args
    assert args == ("webhook_verification_failed",)
    assert kwargs["error_type"] == "RuntimeError"


def test_verify_and_handle_logs_handler_failure(
    endpoint: WebhookEndpoint, frozen_time: None, mocker: MockerFixture
) -> None:
    """Test handler exceptions are logged and not raised."""
    mock_logger = mocker.patch("tidyhq.webhooks.endpoint.logger")
    endpoint.register_callback("contact.updated", mocker.Mock(side_effect=ValueError("bad data")))
    message = make_message()

    endpoint.verify_and_handle(sign(message), message).result(timeout=5)

    args, kwargs = mock_logger.error.call_args
    assert args == ("webhook_handler_failed",)
    assert kwargs["kind"] == "contact.updated"
    assert kwargs["error"] == "bad data"


@pytest.mark.asyncio
async def test_verify_and_handle_in_event_loop(
    endpoint: WebhookEndpoint, frozen_time: None, mocker: MockerFixture
) -> None:
    """Test dispatch runs as a detached task inside a running loop."""
    handler = mocker.Mock()
    endpoint.register_callback("contact.updated", handler)
    message = make_message()

    task = endpoint.verify_and_handle(sign(message), message)

    assert isinstance(task, asyncio.Task)
    handler.assert_not_called()

    await task

    handler.assert_called_once_with({"id": 42, "first_name": "Ada"})
    assert task not in endpoint._pending


@pytest.mark.asyncio
async def test_verify_and_handle_task_swallows_failures(
    endpoint: WebhookEndpoint, frozen_time: None, mocker: MockerFixture
) -> None:
    """Test a failing detached task finishes without an exception."""
    mock_logger = mocker.patch("tidyhq.webhooks.endpoint.logger")
    endpoint.register_callback("contact.updated", mocker.Mock(side_effect=RuntimeError("boom")))
    message = make_message()

    task = endpoint.verify_and_handle(sign(message), message)
    assert task is not None
    await task

    assert task.exception() is None
    assert mock_logger.error.call_args.args == ("webhook_handler_failed",)
