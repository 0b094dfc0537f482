import json

import httpx
import pytest

from nagarconnect.core.config import Settings
from nagarconnect.functions.email_content import render_status_email
from nagarconnect.providers import (
    ConsoleEmailProvider,
    EmailDeliveryError,
    ResendEmailProvider,
    get_email_provider,
)


def settings(**overrides):
    return Settings(database_url="sqlite://", jwt_secret_key="test-secret", **overrides)


def test_console_provider_without_key():
    provider = get_email_provider(settings(resend_api_key=None))

    assert isinstance(provider, ConsoleEmailProvider)
    assert provider.send_email("citizen@example.com", "Hi", "<p>Hi</p>").startswith("console-")


def test_resend_provider_with_key():
    assert isinstance(get_email_provider(settings(resend_api_key="re_test")), ResendEmailProvider)


def test_resend_posts_message():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_123"})

    provider = ResendEmailProvider(
        "re_test", "NagarConnect <onboarding@resend.dev>", transport=httpx.MockTransport(handler),
    )

    message_id = provider.send_email("citizen@example.com", "Status Update", "<p>done</p>")

    assert message_id == "email_123"
    assert seen["auth"] == "Bearer re_test"
    assert seen["body"] == {
        "from": "NagarConnect <onboarding@resend.dev>",
        "to": ["citizen@example.com"],
        "subject": "Status Update",
        "html": "<p>done</p>",
    }


def test_resend_rejection_raises():
    provider = ResendEmailProvider(
        "re_test", "noreply@example.com",
        transport=httpx.MockTransport(lambda request: httpx.Response(422, json={"message": "bad"})),
    )

    with pytest.raises(EmailDeliveryError):
        provider.send_email(["citizen@example.com"], "Status Update", "<p>done</p>")


def test_resend_non_json_reply_raises_delivery_error():
    provider = ResendEmailProvider(
        "re_test", "noreply@example.com",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>gateway</html>")),
    )

    with pytest.raises(EmailDeliveryError):
        provider.send_email(["citizen@example.com"], "Status Update", "<p>done</p>")


def test_status_email_escapes_title_and_marks_resolution():
    content = render_status_email("<script>alert(1)</script>", "resolved", "en")

    assert "<script>" not in content.html
    assert "&lt;script&gt;" in content.html
    assert "Resolved" in content.html
    assert "Your issue has been resolved!" in content.html


def test_non_resolved_email_has_no_resolution_note():
    content = render_status_email("Garbage pile", "acknowledged", "hi")

    assert content.subject == 'स्थिति अपडेट: आपकी समस्या "Garbage pile"'
    assert "स्वीकार किया गया" in content.html
    assert "🎉" not in content.html
