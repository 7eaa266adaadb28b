"""Email notifier - SMTP delivery of security alerts to administrators."""

import logging
import smtplib
from email.mime.text import MIMEText
from typing import List, Optional

from geo_guard.common.config.settings import Config
from geo_guard.common.constants import NotificationConstants
from geo_guard.common.exceptions import NotificationError
from geo_guard.notifications.port import LoggingNotifier, NotificationPort
from geo_guard.notifications.schemas import (
    DailySummary,
    MultipleLocationsDetails,
    SuspiciousLoginDetails,
)
from geo_guard.notifications.templates import (
    render_daily_summary,
    render_multiple_locations,
    render_suspicious_login,
)


logger = logging.getLogger(__name__)


class EmailNotifier(NotificationPort):
    """Sends alerts over SMTP with STARTTLS.

    Every send opens its own connection; there is no pooling or retry.
    """

    channel = "email"

    def __init__(
        self,
        sender: str,
        password: str,
        recipients: List[str],
        smtp_host: str = NotificationConstants.SMTP_HOST,
        smtp_port: int = NotificationConstants.SMTP_PORT,
        timeout: float = NotificationConstants.SMTP_TIMEOUT_SECONDS,
    ):
        """Initialize the notifier.

        Args:
            sender: SMTP login and From address
            password: SMTP password
            recipients: Admin addresses receiving every alert
            smtp_host: SMTP server
            smtp_port: SMTP port (STARTTLS)
            timeout: Socket timeout in seconds
        """
        self.sender = sender
        self.password = password
        self.recipients = list(recipients)
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> Optional["EmailNotifier"]:
        """Build from configuration, or None when email is not configured."""
        if not config.email_configured or not config.admin_emails:
            return None
        return cls(
            sender=config.email_user,
            password=config.email_password,
            recipients=config.admin_emails,
            smtp_host=config.smtp_host,
            smtp_port=config.smtp_port,
        )

    def send(self, subject: str, body: str) -> None:
        """Send one message to all recipients.

        Raises:
            NotificationError: If the SMTP exchange fails
        """
        msg = MIMEText(body)
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = ", ".join(self.recipients)

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.sender, self.password)
                server.sendmail(self.sender, self.recipients, msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(
                f"Failed to send email: {e}",
                channel=self.channel,
                details={"subject": subject},
            ) from e

        logger.info("Alert email sent", extra={"subject": subject})

    def verify_connection(self) -> bool:
        """Check that the SMTP server accepts our credentials."""
        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.sender, self.password)
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email configuration check failed: {e}")
            return False

    def notify_suspicious_login(self, details: SuspiciousLoginDetails) -> None:
        self.send(*render_suspicious_login(details))

    def notify_multiple_active_locations(self, details: MultipleLocationsDetails) -> None:
        self.send(*render_multiple_locations(details))

    def notify_daily_summary(self, summary: DailySummary) -> None:
        self.send(*render_daily_summary(summary))


def create_notifier(config: Config) -> NotificationPort:
    """Email when configured, log output otherwise."""
    notifier = EmailNotifier.from_config(config)
    if notifier is None:
        logger.warning(
            "Email not configured. Set EMAIL_USER and EMAIL_PASS to enable notifications"
        )
        return LoggingNotifier()
    return notifier
