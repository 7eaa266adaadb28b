"""Reporting Service - read-only derivations over users, sessions and attempts.

Nothing here creates state. Every method is a pure view over the stores
at the time of the call.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import List, Optional

from geo_guard.agents.location.agent import ConcurrentLocationAgent
from geo_guard.common.constants import GeoConstants, ReportingConstants
from geo_guard.common.exceptions import NotificationError
from geo_guard.data.schemas.login_attempt import LoginAttemptRecord
from geo_guard.notifications.port import NotificationPort
from geo_guard.notifications.schemas import DailySummary, SuspiciousUserCount
from geo_guard.reporting.schemas import ActiveLocation, UserDetails, UserSummary
from geo_guard.storage.ledger import AttemptLedger, SessionLedger
from geo_guard.storage.user_store import UserStore


logger = logging.getLogger(__name__)


class ReportingService:
    """Snapshot queries for dashboards and the daily summary."""

    def __init__(
        self,
        users: UserStore,
        sessions: SessionLedger,
        attempts: AttemptLedger,
        location_agent: Optional[ConcurrentLocationAgent] = None,
    ):
        """Initialize the reporting service.

        Args:
            users: User store
            sessions: Session ledger
            attempts: Attempt ledger
            location_agent: Used to count active location clusters
        """
        self.users = users
        self.sessions = sessions
        self.attempts = attempts
        self.location_agent = location_agent or ConcurrentLocationAgent()

    def login_attempts(self) -> List[LoginAttemptRecord]:
        """All retained attempts, most recent first."""
        return self.attempts.most_recent_first()

    def user_summaries(self, now_millis: Optional[int] = None) -> List[UserSummary]:
        """Session counts, last login and active locations for every user."""
        now = self.sessions.now() if now_millis is None else now_millis
        summaries = []

        for user in self.users.all_users():
            active = self.sessions.active_sessions(user.user_id, now)
            last = self.sessions.last_session(user.user_id)
            report = self.location_agent.cluster_active(active)
            summaries.append(UserSummary(
                user_id=user.user_id,
                username=user.username,
                total_sessions=self.sessions.session_count(user.user_id),
                active_sessions=len(active),
                last_login=last.timestamp_millis if last else None,
                locations=[
                    ActiveLocation(
                        lat=s.location.latitude,
                        lng=s.location.longitude,
                        timestamp=s.timestamp_millis,
                    )
                    for s in active
                ],
                active_location_clusters=report.location_count,
            ))

        return summaries

    def user_details(self, user_id: str) -> UserDetails:
        """A user's sessions, most recent first.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = self.users.get_user(user_id)
        return UserDetails(
            user_id=user.user_id,
            username=user.username,
            sessions=list(reversed(self.sessions.all_sessions(user_id))),
        )

    def daily_summary(self, now_millis: Optional[int] = None) -> DailySummary:
        """Aggregate the last day of attempts."""
        now = self.sessions.now() if now_millis is None else now_millis
        cutoff = now - ReportingConstants.SUMMARY_WINDOW_HOURS * GeoConstants.MILLIS_PER_HOUR
        recent = self.attempts.since(cutoff)

        suspicious_by_user = Counter(a.username for a in recent if a.suspicious)
        # Counter.most_common keeps first-seen order among equal counts
        top = [
            SuspiciousUserCount(username=username, suspicious_count=count)
            for username, count in suspicious_by_user.most_common(
                ReportingConstants.TOP_SUSPICIOUS_USERS
            )
        ]

        return DailySummary(
            total_logins=sum(1 for a in recent if a.success),
            suspicious_logins=sum(1 for a in recent if a.suspicious),
            failed_logins=sum(1 for a in recent if not a.success),
            top_suspicious_users=top,
            date=datetime.fromtimestamp(now / 1000).strftime("%a %b %d %Y"),
        )

    def send_daily_summary(
        self,
        notifier: NotificationPort,
        now_millis: Optional[int] = None,
    ) -> bool:
        """Send the daily summary if there was any activity.

        Returns:
            True if a summary was delivered
        """
        summary = self.daily_summary(now_millis)
        if not summary.has_activity:
            logger.info("No activity today, skipping daily summary")
            return False

        try:
            notifier.notify_daily_summary(summary)
        except NotificationError as e:
            logger.error(f"Failed to send daily summary: {e}", exc_info=True)
            return False

        logger.info("Daily summary sent", extra={"date": summary.date})
        return True
