import logging
import smtplib
from email.message import EmailMessage

from teamboard.core.config import settings

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, body: str):
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.SMTP_USER
    msg["To"] = to_email
    msg.set_content(body)

    try:
        with smtplib.SMTP_SSL(settings.SMTP_SERVER, settings.SMTP_PORT) as smtp:
            smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            smtp.send_message(msg)
            logger.info("Email sent to %s", to_email)
    except Exception:
        logger.exception("Failed to send email to %s", to_email)
        raise


def send_password_reset_email(to_email: str, reset_url: str):
    subject = "Your password reset token (valid for %d minutes)" % settings.PASSWORD_RESET_EXPIRE_MINUTES
    body = f"""
Forgot your password? Follow the link below to choose a new one:

{reset_url}

If you didn't request a reset, please ignore this email.
"""
    send_email(to_email, subject, body)
