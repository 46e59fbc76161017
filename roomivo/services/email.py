import html
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from roomivo.core.config import settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    return all([
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_password,
        settings.smtp_from_email,
    ])


def _applications_link() -> str | None:
    if not settings.frontend_url:
        return None
    return f"{settings.frontend_url.rstrip('/')}/applications"


async def send_email(to: str, subject: str, text: str) -> None:
    """
    Send a plain-text + HTML e-mail.

    Raises:
        ValueError: If SMTP is not configured.
    """
    if not smtp_configured():
        logger.warning("SMTP not configured - cannot send '%s' to %s", subject, to)
        raise ValueError("SMTP is not configured. Please configure SMTP settings in .env file.")

    message = MIMEMultipart("alternative")
    message["Subject"] = subject
    message["From"] = settings.smtp_from_email
    message["To"] = to

    link = _applications_link()
    if link:
        text = f"{text}\n\nView it on Roomivo: {link}"
    paragraphs = "".join(
        f"<p>{html.escape(line)}</p>" for line in text.splitlines() if line.strip()
    )
    html_body = f"<html><body>{paragraphs}</body></html>"

    message.attach(MIMEText(text, "plain"))
    message.attach(MIMEText(html_body, "html"))

    send_kwargs = {
        "hostname": settings.smtp_host,
        "port": settings.smtp_port,
        "username": settings.smtp_user,
        "password": settings.smtp_password,
    }

    if settings.smtp_use_tls:
        # Port 465 uses direct TLS, everything else STARTTLS
        if settings.smtp_port == 465:
            send_kwargs["use_tls"] = True
        else:
            send_kwargs["start_tls"] = True

    await aiosmtplib.send(message, **send_kwargs)


async def notify(to: str, subject: str, text: str) -> None:
    """Best-effort notification: delivery problems are logged, never raised."""
    try:
        await send_email(to, subject, text)
    except ValueError as e:
        logger.info("Notification to %s skipped: %s", to, e)
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error("Failed to send notification to %s: %s", to, e)


async def notify_new_application(landlord_email: str, property_title: str, application_id: int) -> None:
    await notify(
        landlord_email,
        "New rental application",
        f"You received a new application (#{application_id}) for \"{property_title}\".",
    )


async def notify_application_reviewed(
    tenant_email: str, property_title: str, application_id: int, status: str
) -> None:
    await notify(
        tenant_email,
        f"Your application was {status}",
        f"Your application (#{application_id}) for \"{property_title}\" was {status}.",
    )
