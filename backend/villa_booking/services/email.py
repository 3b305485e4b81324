"""Outbound e-mail over SMTP."""

import logging
from email.message import EmailMessage

import aiosmtplib

from villa_booking.config import settings

logger = logging.getLogger(__name__)


class EmailNotConfiguredError(RuntimeError):
    """Raised when no owner address or SMTP host is configured."""


class EmailDeliveryError(RuntimeError):
    """Raised when the SMTP server rejects or drops the message."""


def build_message(
    recipient: str,
    subject: str,
    html: str,
    text: str,
    reply_to: str | None = None,
) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.smtp_from
    msg["To"] = recipient
    msg["Subject"] = subject
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content(text)
    msg.add_alternative(html, subtype="html")
    return msg


async def send_email(msg: EmailMessage) -> None:
    """Send a message through the configured SMTP server.

    Raises:
        EmailNotConfiguredError: If SMTP is not configured.
        EmailDeliveryError: If sending fails. Not retried.
    """
    if not settings.smtp_host:
        raise EmailNotConfiguredError("SMTP host is not configured")

    try:
        await aiosmtplib.send(
            msg,
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username or None,
            password=settings.smtp_password or None,
            start_tls=bool(settings.smtp_username),
            timeout=settings.smtp_timeout_seconds,
        )
    except aiosmtplib.SMTPException as exc:
        logger.error("Failed to send email to %s: %s", msg["To"], exc)
        raise EmailDeliveryError(str(exc)) from exc
    except OSError as exc:
        logger.error("SMTP connection to %s failed: %s", settings.smtp_host, exc)
        raise EmailDeliveryError(str(exc)) from exc

    logger.info("Sent email to %s", msg["To"])
