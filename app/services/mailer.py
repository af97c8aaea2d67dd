"""Outgoing mail. Send failures propagate to the caller."""

import logging
import smtplib
from email.message import EmailMessage

from app.config import settings

logger = logging.getLogger(__name__)


def build_reset_link(token: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/reset-password/{token}"


def _build_message(to: str, subject: str, body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.mail_from
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(body)
    return msg


def send_mail(to: str, subject: str, body: str) -> None:
    msg = _build_message(to, subject, body)
    backend = (settings.mail_backend or "smtp").lower()
    if backend == "console":
        logger.info("Mail (console backend) to=%s subject=%s\n%s", to, subject, body)
        return
    if backend != "smtp":
        raise RuntimeError(f"Unknown mail backend: {settings.mail_backend}")
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as smtp:
        if settings.smtp_use_tls:
            smtp.starttls()
        if settings.smtp_username:
            smtp.login(settings.smtp_username, settings.smtp_password or "")
        smtp.send_message(msg)
    logger.info("Mail sent to=%s subject=%s", to, subject)


def send_password_reset_email(to: str, token: str) -> None:
    link = build_reset_link(token)
    body = (
        "A password reset was requested for your account.\n\n"
        f"Open this link to choose a new password: {link}\n\n"
        f"The link expires in {settings.reset_token_expire_minutes} minutes. "
        "If you did not ask for this, ignore this email."
    )
    send_mail(to, "Reset your password", body)
