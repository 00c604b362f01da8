import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from hospital import config


logger = logging.getLogger(__name__)


def is_configured() -> bool:
    return bool(config.EMAIL_USER and config.EMAIL_PASS)


def send_email(to: str, subject: str, html_content: str) -> bool:
    """Send an HTML email through the configured SMTP relay.

    Returns False without sending when SMTP credentials are missing. SMTP
    errors propagate to the caller.
    """
    if not is_configured():
        logger.warning(f"SMTP not configured, skipping email to {to}: {subject}")
        return False

    from_address = f"{config.HOSPITAL_NAME} <{config.EMAIL_USER}>"
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = from_address
    msg["To"] = to
    msg.attach(MIMEText(html_content, "html"))

    if config.SMTP_PORT == 465:
        server = smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT, context=ssl.create_default_context(), timeout=30)
    else:
        server = smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=30)
        server.starttls(context=ssl.create_default_context())

    try:
        server.login(config.EMAIL_USER, config.EMAIL_PASS)
        server.sendmail(config.EMAIL_USER, [to], msg.as_string())
    finally:
        server.quit()

    logger.info(f"Email sent to {to}: {subject}")
    return True
