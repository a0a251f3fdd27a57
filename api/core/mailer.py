"""
Email adapter for the storage backend.

The default implementation uses SMTP, reading credentials from Settings.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from enum import Enum
import logging
import smtplib
import ssl

from .config import get_settings

logger = logging.getLogger(__name__)


class SendResult(str, Enum):
    SENT = "sent"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


def email_configured() -> bool:
    return get_settings().email_configured


def send_email(subject: str, to_email: str, html_body: str, text_body: str | None = None) -> SendResult:
    """
    Send an e-mail with the SMTP credentials taken from the environment.
    Missing credentials return UNAVAILABLE without trying to connect.
    """
    settings = get_settings()
    if not (settings.email_configured and settings.smtp_host and settings.smtp_port):
        logger.warning("SMTP credentials missing; skipping e-mail to %s", to_email)
        return SendResult.UNAVAILABLE
    sender = formataddr((settings.email_from_name, settings.email_user))
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to_email
    plain = text_body or html_body
    msg.attach(MIMEText(plain, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    port = settings.smtp_port
    try:
        if port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                server.login(settings.email_user, settings.email_app_password)
                server.sendmail(settings.email_user, [to_email], msg.as_string())
        else:
            with smtplib.SMTP(settings.smtp_host, port) as server:
                server.ehlo()
                server.starttls(context=ssl.create_default_context())
                server.login(settings.email_user, settings.email_app_password)
                server.sendmail(settings.email_user, [to_email], msg.as_string())
        logger.info("E-mail '%s' sent to %s", subject, to_email)
        return SendResult.SENT
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Failed to send e-mail to %s: %s", to_email, exc)
        return SendResult.FAILED
