"""Tests for the login service state machine."""

from unittest.mock import MagicMock

import pytest

from geo_guard.api.service import LoginResult, LoginService
from geo_guard.common.config.settings import DetectionSettings
from geo_guard.common.exceptions import (
    CredentialMismatchError,
    InvalidInputError,
    NotificationError,
    SuspiciousLoginError,
    UserNotFoundError,
)
from geo_guard.core.types import AttemptStatus, LoginOutcome
from geo_guard.monitoring.metrics import MetricsCollector
from geo_guard.notifications.port import NotificationPort
from geo_guard.orchestration.decision_flow import SuspicionDecisionEngine
from geo_guard.storage.ledger import AttemptLedger, SessionLedger
from geo_guard.storage.user_store import UserStore, seed_demo_users


HOUR = 3_600_000
T0 = 1_769_610_605_000

NEW_YORK = {"latitude": 40.7128, "longitude": -74.0060, "accuracy_meters": 20}
LOS_ANGELES = {"latitude": 34.0522, "longitude": -118.2437, "accuracy_meters": 20}


@pytest.fixture
def notifier():
    mock = MagicMock(spec=NotificationPort)
    mock.channel = "mock"
    return mock


@pytest.fixture
def service(notifier):
    users = UserStore()
    seed_demo_users(users)
    return LoginService(
        users=users,
        sessions=SessionLedger(clock=lambda: T0),
        attempts=AttemptLedger(),
        engine=SuspicionDecisionEngine(DetectionSettings()),
        notifier=notifier,
    )


def login(service, location, ts, username="john@example.com", secret="password123"):
    return service.login(username, secret, location, ip_address="203.0.113.7", timestamp_millis=ts)


class TestInvalidInput:
    """Invalid attempts are rejected before anything is recorded."""

    @pytest.mark.parametrize("username,secret,location", [
        ("", "password123", NEW_YORK),
        ("john@example.com", "", NEW_YORK),
        ("john@example.com", "password123", None),
    ])
    def test_missing_fields(self, service, username, secret, location):
        with pytest.raises(InvalidInputError):
            service.login(username, secret, location, timestamp_millis=T0)

        assert len(service.attempts) == 0

    def test_out_of_range_latitude(self, service):
        with pytest.raises(InvalidInputError) as exc_info:
            login(service, {"latitude": 91, "longitude": 0}, T0)

        assert exc_info.value.code == "INVALID_INPUT"
        assert len(service.attempts) == 0

    def test_negative_timestamp(self, service):
        with pytest.raises(InvalidInputError):
            login(service, NEW_YORK, -5)

    def test_timestamp_defaults_to_clock(self, service):
        result = service.login("john@example.com", "password123", NEW_YORK)

        assert result.session.timestamp_millis == T0


class TestBadCredentials:
    """Unknown users and wrong secrets are recorded as failed attempts."""

    def test_unknown_user(self, service):
        with pytest.raises(UserNotFoundError) as exc_info:
            login(service, NEW_YORK, T0, username="mallory@example.com")

        assert exc_info.value.message == "Invalid credentials"
        record = service.attempts.all()[0]
        assert record.success is False
        assert record.reason == "Invalid credentials"
        assert record.status == AttemptStatus.FAILED

    def test_wrong_secret(self, service):
        with pytest.raises(CredentialMismatchError):
            login(service, NEW_YORK, T0, secret="wrong")

        assert service.attempts.all()[0].status == AttemptStatus.FAILED
        assert service.sessions.session_count("user1") == 0

    def test_failed_attempt_does_not_affect_history(self, service):
        """A failed attempt from LA does not make a later NY login suspicious."""
        with pytest.raises(CredentialMismatchError):
            login(service, LOS_ANGELES, T0, secret="wrong")

        result = login(service, NEW_YORK, T0 + 60_000)

        assert result.outcome == LoginOutcome.ACCEPTED


class TestAccepted:
    """Clean logins create a session and a successful attempt."""

    def test_first_login(self, service, notifier):
        result = login(service, NEW_YORK, T0)

        assert isinstance(result, LoginResult)
        assert result.outcome == LoginOutcome.ACCEPTED
        assert result.user_id == "user1"
        assert result.session.session_id.startswith("sess_")
        assert result.location_report.location_count == 1
        assert service.sessions.session_count("user1") == 1

        record = service.attempts.all()[0]
        assert record.status == AttemptStatus.SUCCESS
        assert record.reason is None
        assert record.ip_address == "203.0.113.7"
        notifier.notify_suspicious_login.assert_not_called()
        notifier.notify_multiple_active_locations.assert_not_called()

    def test_plausible_travel(self, service):
        login(service, NEW_YORK, T0)
        result = login(service, LOS_ANGELES, T0 + 6 * HOUR)

        # Accepted, but both sessions are live in different places
        assert result.outcome == LoginOutcome.ACCEPTED_FLAGGED_MULTILOCATION
        assert service.sessions.session_count("user1") == 2

    def test_session_ids_are_distinct(self, service):
        first = login(service, NEW_YORK, T0)
        second = login(service, NEW_YORK, T0 + 1000)

        assert first.session.session_id != second.session.session_id


class TestSuspicious:
    """Suspicious logins are recorded, alerted and refused."""

    def test_impossible_travel_refused(self, service, notifier):
        login(service, NEW_YORK, T0)

        with pytest.raises(SuspiciousLoginError) as exc_info:
            login(service, LOS_ANGELES, T0 + HOUR)

        error = exc_info.value
        assert "exceeds max allowed 900 km/h" in error.reason
        assert error.verdict is not None
        assert error.details["signal"] == "impossible_travel"
        assert service.sessions.session_count("user1") == 1

        record = service.attempts.most_recent_first()[0]
        assert record.success is True
        assert record.suspicious is True
        assert record.status == AttemptStatus.BLOCKED
        assert record.reason == error.reason

    def test_alert_includes_previous_location(self, service, notifier):
        login(service, NEW_YORK, T0)

        with pytest.raises(SuspiciousLoginError):
            login(service, LOS_ANGELES, T0 + HOUR)

        details = notifier.notify_suspicious_login.call_args[0][0]
        assert details.username == "john@example.com"
        assert details.current_location.latitude == LOS_ANGELES["latitude"]
        assert details.previous_location.latitude == NEW_YORK["latitude"]
        assert details.previous_location.timestamp == T0

    def test_alert_toggle(self, service, notifier):
        service.alert_on_suspicious_activity = False
        login(service, NEW_YORK, T0)

        with pytest.raises(SuspiciousLoginError):
            login(service, LOS_ANGELES, T0 + HOUR)

        notifier.notify_suspicious_login.assert_not_called()

    def test_notification_failure_does_not_change_verdict(self, service, notifier):
        notifier.notify_suspicious_login.side_effect = NotificationError("smtp down", channel="mock")
        login(service, NEW_YORK, T0)

        with pytest.raises(SuspiciousLoginError):
            login(service, LOS_ANGELES, T0 + HOUR)

        assert service.attempts.most_recent_first()[0].status == AttemptStatus.BLOCKED

    def test_concurrent_locations(self, service, notifier):
        """Third far-apart location within the active window is refused."""
        login(service, {"latitude": 0, "longitude": 10}, T0)
        second = login(service, {"latitude": 0, "longitude": 20}, T0 + 10 * HOUR)
        assert second.flagged_multilocation

        with pytest.raises(SuspiciousLoginError) as exc_info:
            login(service, {"latitude": 0, "longitude": 0}, T0 + 20 * HOUR)

        assert exc_info.value.reason == "Multiple active sessions detected from 3 different locations"

    def test_expired_sessions_are_ignored(self, service):
        login(service, NEW_YORK, T0)

        result = login(service, LOS_ANGELES, T0 + 25 * HOUR)

        assert result.outcome == LoginOutcome.ACCEPTED


class TestMultipleLocations:
    """Post-success clustering raises a separate alert."""

    def test_two_near_one_far(self, service, notifier):
        """Each step is plausible pairwise, yet two clusters are live."""
        login(service, {"latitude": 0, "longitude": 0}, T0)
        login(service, {"latitude": 0, "longitude": 10}, T0 + 6 * HOUR)
        result = login(service, {"latitude": 0, "longitude": 0.001}, T0 + 12 * HOUR)

        assert result.outcome == LoginOutcome.ACCEPTED_FLAGGED_MULTILOCATION
        assert result.location_report.location_count == 2

        details = notifier.notify_multiple_active_locations.call_args[0][0]
        assert details.active_session_count == 3
        assert details.location_count == 2

    def test_notification_failure_is_isolated(self, service, notifier):
        notifier.notify_multiple_active_locations.side_effect = NotificationError(
            "smtp down", channel="mock"
        )
        login(service, {"latitude": 0, "longitude": 0}, T0)

        result = login(service, {"latitude": 0, "longitude": 10}, T0 + 12 * HOUR)

        assert result.flagged_multilocation
        assert service.sessions.session_count("user1") == 2


class TestMetrics:
    """Metrics are recorded when a collector is attached."""

    def test_records_outcomes(self, service):
        service.metrics = MagicMock(spec=MetricsCollector)

        login(service, NEW_YORK, T0)
        with pytest.raises(CredentialMismatchError):
            login(service, NEW_YORK, T0 + 1, secret="wrong")

        outcomes = [c.args[0] for c in service.metrics.record_login.call_args_list]
        assert outcomes == [LoginOutcome.ACCEPTED, LoginOutcome.REJECTED_BAD_CREDENTIAL]

    def test_metrics_failure_is_isolated(self, service):
        service.metrics = MagicMock(spec=MetricsCollector)
        service.metrics.record_login.side_effect = IOError("CloudWatch write failed")

        result = login(service, NEW_YORK, T0)

        assert result.outcome == LoginOutcome.ACCEPTED
