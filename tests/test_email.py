import asyncio

import pytest

from roomivo.core.config import settings
from roomivo.services import email as email_service


@pytest.fixture
def sent_messages(monkeypatch):
    """Configure SMTP and capture outgoing messages instead of sending them."""
    monkeypatch.setattr(settings, "smtp_host", "smtp.example.com")
    monkeypatch.setattr(settings, "smtp_port", 587)
    monkeypatch.setattr(settings, "smtp_user", "mailer")
    monkeypatch.setattr(settings, "smtp_password", "secret")
    monkeypatch.setattr(settings, "smtp_from_email", "noreply@example.com")
    monkeypatch.setattr(settings, "frontend_url", None)

    sent = []

    async def fake_send(message, **kwargs):
        sent.append((message, kwargs))

    monkeypatch.setattr(email_service.aiosmtplib, "send", fake_send)
    return sent


def _parts(message) -> tuple[str, str]:
    plain, html_part = message.get_payload()
    return (
        plain.get_payload(decode=True).decode(),
        html_part.get_payload(decode=True).decode(),
    )


def test_new_application_mail(sent_messages):
    asyncio.run(email_service.notify_new_application("landlord@example.com", "Sunny loft", 7))

    assert len(sent_messages) == 1
    message, kwargs = sent_messages[0]
    assert message["To"] == "landlord@example.com"
    assert message["Subject"] == "New rental application"
    assert kwargs["start_tls"] is True

    plain, html_body = _parts(message)
    assert "#7" in plain
    assert "Sunny loft" in html_body


def test_property_title_is_escaped_in_html(sent_messages):
    title = '<a href="http://evil">click</a>'
    asyncio.run(email_service.notify_new_application("landlord@example.com", title, 1))

    message, _ = sent_messages[0]
    plain, html_body = _parts(message)
    assert "<a href=" not in html_body
    assert "&lt;a href=&quot;http://evil&quot;&gt;click&lt;/a&gt;" in html_body
    # The plain-text part is not HTML and keeps the title as written
    assert title in plain


def test_notification_skipped_without_smtp(monkeypatch):
    monkeypatch.setattr(settings, "smtp_host", None)
    sent = []

    async def fake_send(message, **kwargs):
        sent.append(message)

    monkeypatch.setattr(email_service.aiosmtplib, "send", fake_send)
    asyncio.run(email_service.notify_application_reviewed("t@example.com", "Loft", 1, "accepted"))
    assert sent == []
