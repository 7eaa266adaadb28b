"""Integration tests for GeoGuard.

End-to-end tests that run logins through the real service graph, with
only the SMTP server mocked.
"""

from unittest.mock import patch

import pytest

from geo_guard.api.service import LoginService
from geo_guard.common.config.settings import Config
from geo_guard.common.exceptions import SuspiciousLoginError
from geo_guard.core.types import AttemptStatus, LoginOutcome
from geo_guard.notifications.email_notifier import create_notifier
from geo_guard.reporting.service import ReportingService
from geo_guard.storage.user_store import UserStore, seed_demo_users


HOUR = 3_600_000
T0 = 1_769_610_605_000

NEW_YORK = {"latitude": 40.7128, "longitude": -74.0060, "accuracy_meters": 20}
CHICAGO = {"latitude": 41.8781, "longitude": -87.6298, "accuracy_meters": 20}
LONDON = {"latitude": 51.5074, "longitude": -0.1278, "accuracy_meters": 20}


class TestLoginFlowIntegration:
    """Integration tests for the login flow."""

    @pytest.fixture
    def config(self):
        return Config(
            email_user="alerts@example.com",
            email_password="app-password",
            admin_emails=["secops@example.com"],
        )

    @pytest.fixture
    def smtp(self):
        with patch("geo_guard.notifications.email_notifier.smtplib.SMTP") as mock_smtp:
            yield mock_smtp.return_value.__enter__.return_value

    @pytest.fixture
    def services(self, config, smtp):
        users = UserStore()
        seed_demo_users(users)
        login = LoginService.from_config(
            config, users=users, notifier=create_notifier(config), clock=lambda: T0
        )
        reporting = ReportingService(login.users, login.sessions, login.attempts)
        return login, reporting

    def sent_subjects(self, smtp):
        return [c.args[2] for c in smtp.sendmail.call_args_list]

    def test_commuter_day(self, services, smtp):
        """New York in the morning, Chicago in the evening: plausible but multi-location."""
        login, reporting = services

        first = login.login("john@example.com", "password123", NEW_YORK, timestamp_millis=T0)
        second = login.login("john@example.com", "password123", CHICAGO, timestamp_millis=T0 + 8 * HOUR)

        assert first.outcome == LoginOutcome.ACCEPTED
        assert second.outcome == LoginOutcome.ACCEPTED_FLAGGED_MULTILOCATION
        assert len(smtp.sendmail.call_args_list) == 1
        assert "Multiple Active Sessions - john@example.com" in self.sent_subjects(smtp)[0]

        summary = reporting.daily_summary(now_millis=T0 + 9 * HOUR)
        assert summary.total_logins == 2
        assert summary.suspicious_logins == 0

    def test_account_takeover_attempt(self, services, smtp):
        """A login from London an hour after New York is refused and alerted."""
        login, reporting = services
        login.login("john@example.com", "password123", NEW_YORK, ip_address="198.51.100.4", timestamp_millis=T0)

        with pytest.raises(SuspiciousLoginError):
            login.login("john@example.com", "password123", LONDON, ip_address="203.0.113.7", timestamp_millis=T0 + HOUR)

        message = self.sent_subjects(smtp)[0]
        assert "Suspicious Login Detected - john@example.com" in message
        assert "203.0.113.7" in message

        attempts = reporting.login_attempts()
        assert [a.status for a in attempts] == [AttemptStatus.BLOCKED, AttemptStatus.SUCCESS]
        assert reporting.user_details("user1").sessions[0].location.latitude == NEW_YORK["latitude"]

        summary = reporting.daily_summary(now_millis=T0 + 2 * HOUR)
        assert summary.suspicious_logins == 1
        assert summary.top_suspicious_users[0].username == "john@example.com"

        assert reporting.send_daily_summary(login.notifier, now_millis=T0 + 2 * HOUR) is True
        assert "Daily Security Summary" in self.sent_subjects(smtp)[-1]

    def test_users_do_not_interfere(self, services):
        login, _ = services
        login.login("john@example.com", "password123", NEW_YORK, timestamp_millis=T0)

        result = login.login("jane@example.com", "password456", LONDON, timestamp_millis=T0 + HOUR)

        assert result.outcome == LoginOutcome.ACCEPTED

    def test_session_retention_bound(self, config, smtp):
        config.max_sessions_per_user = 5
        users = UserStore()
        seed_demo_users(users)
        login = LoginService.from_config(config, users=users, clock=lambda: T0)

        for i in range(8):
            login.login("john@example.com", "password123", NEW_YORK, timestamp_millis=T0 + i * 1000)

        assert login.sessions.session_count("user1") == 5
