"""SparkPost delivery stories against a fake transmissions endpoint."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from sparkmail.adapters.sparkpost import (
    FILTERED,
    SparkPostConfig,
    deliver,
    handle_config,
    mark_transactional,
    tag,
)
from sparkmail.domain.email import Attachment, Email, new_email, put_attachment, put_header
from sparkmail.domain.errors import ApiError, ConfigurationError, DeliveryError

if TYPE_CHECKING:
    from conftest import FakeSparkPost

API_KEY = "123_abc"

ERROR_HTML_BODY = (
    '<!DOCTYPE html><html xmlns="http://www.w3.org/1999/xhtml">\n<head><title>Email</title>\n'
    '<style type="text/css">\nbody {\n width: 100% !important; }\n\n</style>\n</head><body><p>\n'
    '<a href="https://www.example.org?utm_medium=email&utm_source=campaign">Contact us</a>\n</p></body></html>'
)


def _email(**attrs: Any) -> Email:
    """Build an email with the defaults every scenario shares."""
    defaults: dict[str, Any] = {"sender": "foo@bar.com", "to": []}
    return new_email(**{**defaults, **attrs})


def _config(fake: FakeSparkPost, **overrides: Any) -> SparkPostConfig:
    return SparkPostConfig(**{"api_key": API_KEY, "base_uri": fake.base_uri, **overrides})


# ======================== Configuration ========================


@pytest.mark.os_agnostic
def test_deliver_without_api_key_raises_before_any_request(fake_sparkpost: FakeSparkPost) -> None:
    """A missing key fails fast and the server never hears about it."""
    with pytest.raises(ConfigurationError, match="no API key set"):
        deliver(_email(), SparkPostConfig(api_key=None, base_uri=fake_sparkpost.base_uri))

    assert fake_sparkpost.requests == []


@pytest.mark.os_agnostic
def test_handle_config_without_api_key_raises() -> None:
    with pytest.raises(ConfigurationError, match="no API key set"):
        handle_config(SparkPostConfig())


@pytest.mark.os_agnostic
def test_missing_key_error_hides_request_header_values() -> None:
    config = SparkPostConfig(request_headers={"X-MSYS-SUBACCOUNT": "subaccount-token-99"})

    with pytest.raises(ConfigurationError) as exc_info:
        handle_config(config)

    message = str(exc_info.value)
    assert "subaccount-token-99" not in message
    assert "X-MSYS-SUBACCOUNT" in message


@pytest.mark.os_agnostic
def test_handle_config_treats_blank_api_key_as_missing() -> None:
    with pytest.raises(ConfigurationError):
        handle_config(SparkPostConfig(api_key="   "))


@pytest.mark.os_agnostic
def test_handle_config_returns_the_key() -> None:
    assert handle_config(SparkPostConfig(api_key=API_KEY)) == API_KEY


# ======================== Request shape ========================


@pytest.mark.os_agnostic
def test_deliver_posts_once_to_transmissions_path(fake_sparkpost: FakeSparkPost) -> None:
    deliver(_email(), _config(fake_sparkpost))

    assert len(fake_sparkpost.requests) == 1
    assert fake_sparkpost.last_request.method == "POST"
    assert fake_sparkpost.last_request.path == "/api/v1/transmissions"


@pytest.mark.os_agnostic
def test_deliver_returns_the_success_response(fake_sparkpost: FakeSparkPost) -> None:
    response = deliver(_email(), _config(fake_sparkpost))

    assert response.status_code == 200
    assert response.body == "SENT"
    assert response.data is None


@pytest.mark.os_agnostic
def test_deliver_sends_content_fields_reply_to_and_attachments(
    fake_sparkpost: FakeSparkPost,
    attachment_path: Path,
) -> None:
    """From, bodies, subject, reply-to and a file attachment land in ``content``."""
    email = _email(
        sender=("From", "from@foo.com"),
        subject="My Subject",
        text_body="TEXT BODY",
        html_body="HTML BODY",
    )
    email = put_header(email, "Reply-To", "reply@foo.com")
    email = put_attachment(email, attachment_path)

    deliver(email, _config(fake_sparkpost))

    request = fake_sparkpost.last_request
    assert request.headers["content-type"] == "application/json"
    assert request.headers["authorization"] == API_KEY

    content = request.params["content"]
    assert content["from"] == {"name": "From", "email": "from@foo.com"}
    assert content["subject"] == "My Subject"
    assert content["text"] == "TEXT BODY"
    assert content["html"] == "HTML BODY"
    assert content["headers"] == {}
    assert content["reply_to"] == "reply@foo.com"
    assert content["attachments"] == [
        {"type": "text/plain", "name": "attachment.txt", "data": "VGVzdCBBdHRhY2htZW50Cg=="},
    ]


@pytest.mark.os_agnostic
def test_deliver_encodes_in_memory_attachments(fake_sparkpost: FakeSparkPost, attachment_path: Path) -> None:
    attachment = Attachment(filename="test.txt", content_type="text/plain", data=attachment_path.read_bytes())
    email = put_attachment(_email(subject="My Subject"), attachment)

    deliver(email, _config(fake_sparkpost))

    assert fake_sparkpost.last_request.params["content"]["attachments"] == [
        {"type": "text/plain", "name": "test.txt", "data": "VGVzdCBBdHRhY2htZW50Cg=="},
    ]


@pytest.mark.os_agnostic
def test_deliver_orders_recipients_and_sets_header_to(fake_sparkpost: FakeSparkPost) -> None:
    email = _email(
        to=[("To", "to@bar.com")],
        cc=[("CC", "cc@bar.com")],
        bcc=[("BCC", "bcc@bar.com")],
    )

    deliver(email, _config(fake_sparkpost))

    params = fake_sparkpost.last_request.params
    assert params["recipients"] == [
        {"address": {"name": "To", "email": "to@bar.com"}},
        {"address": {"name": "CC", "email": "cc@bar.com", "header_to": "to@bar.com"}},
        {"address": {"name": "BCC", "email": "bcc@bar.com", "header_to": "to@bar.com"}},
    ]
    assert params["content"]["headers"]["CC"] == "cc@bar.com"


@pytest.mark.os_agnostic
def test_deliver_merges_message_params_at_top_level(fake_sparkpost: FakeSparkPost) -> None:
    deliver(mark_transactional(_email()), _config(fake_sparkpost))

    assert fake_sparkpost.last_request.params["options"] == {"transactional": True}


@pytest.mark.os_agnostic
def test_deliver_copies_tags_onto_every_recipient(fake_sparkpost: FakeSparkPost) -> None:
    email = tag(_email(to=["foo@example.com", "bar@example.com"]), "test-tag")

    deliver(email, _config(fake_sparkpost))

    params = fake_sparkpost.last_request.params
    assert params["recipients"] == [
        {"address": {"email": "foo@example.com", "name": None}, "tags": ["test-tag"]},
        {"address": {"email": "bar@example.com", "name": None}, "tags": ["test-tag"]},
    ]
    assert "tags" not in params


@pytest.mark.os_agnostic
def test_deliver_adds_configured_request_headers(fake_sparkpost: FakeSparkPost) -> None:
    config = _config(fake_sparkpost, request_headers=[("X-MSYS-SUBACCOUNT", "123")])

    deliver(_email(), config)

    headers = fake_sparkpost.last_request.headers
    assert headers["content-type"] == "application/json"
    assert headers["authorization"] == API_KEY
    assert headers["x-msys-subaccount"] == "123"


@pytest.mark.os_agnostic
def test_deliver_reuses_a_caller_supplied_client(fake_sparkpost: FakeSparkPost) -> None:
    with httpx.Client(trust_env=False) as client:
        deliver(_email(), _config(fake_sparkpost), client=client)
        deliver(_email(), _config(fake_sparkpost), client=client)

    assert len(fake_sparkpost.requests) == 2


# ======================== Error responses ========================


@pytest.mark.os_agnostic
def test_deliver_raises_api_error_on_non_success(fake_sparkpost: FakeSparkPost) -> None:
    email = _email(sender="INVALID_EMAIL", subject="My Subject", text_body="TEXT BODY", html_body=ERROR_HTML_BODY)

    with pytest.raises(ApiError) as exc_info:
        deliver(email, _config(fake_sparkpost))

    err = exc_info.value
    assert err.status_code == 500
    assert err.response_body == "Error!!"
    assert err.service_name == "SparkPost"
    assert isinstance(err, DeliveryError)


@pytest.mark.os_agnostic
def test_api_error_filters_the_api_key(fake_sparkpost: FakeSparkPost) -> None:
    email = _email(sender="INVALID_EMAIL", subject="My Subject", text_body="TEXT BODY", html_body=ERROR_HTML_BODY)

    with pytest.raises(ApiError, match=r'"key" => "\[FILTERED\]"') as exc_info:
        deliver(email, _config(fake_sparkpost))

    message = str(exc_info.value)
    assert API_KEY not in message
    assert exc_info.value.params["key"] == FILTERED
    assert "Response status: 500" in message
    assert "'Error!!'" in message


@pytest.mark.os_agnostic
def test_api_error_redacts_the_key_wherever_it_appears(fake_sparkpost: FakeSparkPost) -> None:
    """A key echoed back in the params (here the subject) is filtered too."""
    email = _email(sender="INVALID_EMAIL", subject=f"leak {API_KEY}")

    with pytest.raises(ApiError) as exc_info:
        deliver(email, _config(fake_sparkpost))

    assert API_KEY not in str(exc_info.value)
    assert f"leak {FILTERED}" in str(exc_info.value)


@pytest.mark.os_agnostic
def test_deliver_wraps_transport_failures_as_delivery_error() -> None:
    """An unreachable endpoint surfaces as DeliveryError, not an httpx exception."""

    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(_refuse)) as client:
        with pytest.raises(DeliveryError, match="Could not reach SparkPost") as exc_info:
            deliver(_email(), SparkPostConfig(api_key=API_KEY), client=client)

    assert not isinstance(exc_info.value, ApiError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
