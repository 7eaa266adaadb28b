"""Notifications - alert delivery to administrators.

Components:
- NotificationPort: Abstract delivery channel
- LoggingNotifier: Writes alerts to the log
- EmailNotifier: SMTP delivery with plain-text templates
"""

from geo_guard.notifications.port import NotificationPort, LoggingNotifier
from geo_guard.notifications.email_notifier import EmailNotifier, create_notifier
from geo_guard.notifications.schemas import (
    DailySummary,
    MultipleLocationsDetails,
    PreviousLocation,
    SuspiciousLoginDetails,
    SuspiciousUserCount,
)

__all__ = [
    "NotificationPort",
    "LoggingNotifier",
    "EmailNotifier",
    "create_notifier",
    "DailySummary",
    "MultipleLocationsDetails",
    "PreviousLocation",
    "SuspiciousLoginDetails",
    "SuspiciousUserCount",
]
