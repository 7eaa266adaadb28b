"""Notification port - where alerts leave the system.

Delivery is fire-and-forget from the caller's point of view: a failed
notification never changes a login decision that has already been made.
Implementations may raise NotificationError; callers catch and log it.
"""

import logging
from abc import ABC, abstractmethod

from geo_guard.notifications.schemas import (
    DailySummary,
    MultipleLocationsDetails,
    SuspiciousLoginDetails,
)


logger = logging.getLogger(__name__)


class NotificationPort(ABC):
    """Abstract base class for alert delivery channels."""

    channel: str = "abstract"

    @abstractmethod
    def notify_suspicious_login(self, details: SuspiciousLoginDetails) -> None:
        """Alert that a login was refused as suspicious."""
        pass

    @abstractmethod
    def notify_multiple_active_locations(self, details: MultipleLocationsDetails) -> None:
        """Alert that an accepted login left the account live in several places."""
        pass

    @abstractmethod
    def notify_daily_summary(self, summary: DailySummary) -> None:
        """Deliver the daily activity summary."""
        pass


class LoggingNotifier(NotificationPort):
    """Writes alerts to the application log. Used when email is not configured."""

    channel = "log"

    def notify_suspicious_login(self, details: SuspiciousLoginDetails) -> None:
        logger.warning(
            f"Suspicious login for {details.username}: {details.reason}",
            extra={"username": details.username, "ip_address": details.ip_address},
        )

    def notify_multiple_active_locations(self, details: MultipleLocationsDetails) -> None:
        logger.warning(
            f"{details.username} is active from {details.location_count} locations",
            extra={
                "username": details.username,
                "active_session_count": details.active_session_count,
            },
        )

    def notify_daily_summary(self, summary: DailySummary) -> None:
        logger.info(
            f"Daily summary {summary.date}: {summary.total_logins} logins, "
            f"{summary.suspicious_logins} suspicious, {summary.failed_logins} failed"
        )
