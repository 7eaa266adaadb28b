"""Login Service - the login state machine around the decision engine.

This service owns every side effect of a login attempt: credential
resolution, attempt recording, session creation, alerting and metrics.
The decision engine stays a pure function of the history handed to it.

Per attempt:
    RECEIVED -> REJECTED_BAD_CREDENTIAL | REJECTED_SUSPICIOUS | ACCEPTED
    ACCEPTED -> ACCEPTED_FLAGGED_MULTILOCATION (side channel)

Error Handling:
- Invalid input is rejected before anything is recorded
- Unknown users and bad secrets are recorded as failed attempts
- Suspicious verdicts are recorded, alerted and refused
- Notification and metrics failures are logged, never propagated
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from geo_guard.agents.location.schema import ActiveLocationReport
from geo_guard.common.config.settings import Config, DetectionSettings
from geo_guard.common.constants import DetectionConstants
from geo_guard.common.exceptions import (
    CredentialMismatchError,
    InvalidInputError,
    NotificationError,
    SuspiciousLoginError,
    UserNotFoundError,
)
from geo_guard.core.types import LoginOutcome, SignalType
from geo_guard.data.schemas.geo_point import GeoPoint
from geo_guard.data.schemas.login_attempt import LoginAttemptRecord
from geo_guard.data.schemas.session import LoginSample, Session
from geo_guard.monitoring.metrics import MetricsCollector
from geo_guard.notifications.port import LoggingNotifier, NotificationPort
from geo_guard.notifications.schemas import (
    MultipleLocationsDetails,
    PreviousLocation,
    SuspiciousLoginDetails,
)
from geo_guard.orchestration.decision_context import Verdict
from geo_guard.orchestration.decision_flow import SuspicionDecisionEngine
from geo_guard.storage.ledger import AttemptLedger, Clock, SessionHistory, SessionLedger
from geo_guard.storage.user_store import UserStore


logger = logging.getLogger(__name__)


LocationInput = Union[GeoPoint, Mapping[str, Any], None]


@dataclass(frozen=True)
class LoginResult:
    """Outcome of an accepted login."""
    outcome: LoginOutcome
    user_id: str
    username: str
    session: Session
    verdict: Verdict
    location_report: ActiveLocationReport

    @property
    def flagged_multilocation(self) -> bool:
        return self.outcome == LoginOutcome.ACCEPTED_FLAGGED_MULTILOCATION


class LoginService:
    """Service for processing login attempts.

    Orchestrates:
    1. Input validation
    2. Credential resolution
    3. Decision engine over the user's session history
    4. Attempt and session recording
    5. Alerting and metrics
    """

    def __init__(
        self,
        users: UserStore,
        sessions: SessionLedger,
        attempts: AttemptLedger,
        engine: Optional[SuspicionDecisionEngine] = None,
        notifier: Optional[NotificationPort] = None,
        metrics: Optional[MetricsCollector] = None,
        alert_on_suspicious_activity: bool = True,
    ):
        """Initialize the service.

        Args:
            users: Credential resolution
            sessions: Per-user session history
            attempts: Global attempt log
            engine: Decision engine. Created with default settings if not provided.
            notifier: Alert channel. Logs alerts if not provided.
            metrics: Optional CloudWatch collector
            alert_on_suspicious_activity: Whether suspicious logins raise an alert
        """
        self.users = users
        self.sessions = sessions
        self.attempts = attempts
        self.engine = engine or SuspicionDecisionEngine()
        self.notifier = notifier or LoggingNotifier()
        self.metrics = metrics
        self.alert_on_suspicious_activity = alert_on_suspicious_activity

    @classmethod
    def from_config(
        cls,
        config: Config,
        users: Optional[UserStore] = None,
        notifier: Optional[NotificationPort] = None,
        metrics: Optional[MetricsCollector] = None,
        clock: Optional[Clock] = None,
    ) -> "LoginService":
        """Wire fresh stores and an engine from configuration."""
        settings = config.detection_settings()
        return cls(
            users=users or UserStore(),
            sessions=SessionLedger(
                max_sessions_per_user=settings.max_sessions_per_user,
                active_session_window_hours=settings.active_session_window_hours,
                clock=clock,
            ),
            attempts=AttemptLedger(max_login_attempts=settings.max_login_attempts),
            engine=SuspicionDecisionEngine(settings),
            notifier=notifier,
            metrics=metrics,
            alert_on_suspicious_activity=config.alert_on_suspicious_activity,
        )

    @property
    def settings(self) -> DetectionSettings:
        return self.engine.settings

    def login(
        self,
        username: str,
        secret: str,
        location: LocationInput,
        ip_address: str = "",
        timestamp_millis: Optional[int] = None,
    ) -> LoginResult:
        """Process a login attempt.

        Args:
            username: Presented username
            secret: Presented credential
            location: Reported position (GeoPoint or mapping)
            ip_address: Client IP address
            timestamp_millis: Attempt time. The session ledger clock if not provided;
                callers facing clients never pass it.

        Returns:
            LoginResult for an accepted login

        Raises:
            InvalidInputError: Missing or malformed fields; nothing recorded
            UserNotFoundError: Unknown username; recorded as failed
            CredentialMismatchError: Wrong secret; recorded as failed
            SuspiciousLoginError: Verdict was suspicious; recorded and refused
        """
        started = time.perf_counter()
        candidate = self._build_candidate(username, secret, location, ip_address, timestamp_millis)

        user = self.users.resolve(username)
        if user is None or not user.credential_valid(secret):
            self._record_failure(username, candidate)
            self._record_metrics(LoginOutcome.REJECTED_BAD_CREDENTIAL, SignalType.NONE, started)
            if user is None:
                raise UserNotFoundError(
                    DetectionConstants.REASON_INVALID_CREDENTIALS,
                    details={"username": username},
                )
            raise CredentialMismatchError(
                DetectionConstants.REASON_INVALID_CREDENTIALS,
                details={"username": username},
            )

        # Read history, decide, append and re-check as one unit per user
        with self.sessions.user_lock(user.user_id):
            history = self.sessions.history(
                user.user_id,
                recent_window_hours=self.settings.recent_session_window_hours,
                now_millis=candidate.timestamp_millis,
            )
            verdict = self.engine.decide(user.user_id, candidate, history)

            self.attempts.append(LoginAttemptRecord(
                username=username,
                success=True,
                suspicious=verdict.suspicious,
                reason=verdict.reason or None,
                location=candidate.location,
                timestamp_millis=candidate.timestamp_millis,
                ip_address=candidate.ip_address,
            ))

            if not verdict.suspicious:
                session = Session.from_sample(candidate)
                self.sessions.append(user.user_id, session)
                active = self.sessions.active_sessions(user.user_id, candidate.timestamp_millis)
                report = self.engine.check_active_locations(user.user_id, active)

        if verdict.suspicious:
            self._record_metrics(LoginOutcome.REJECTED_SUSPICIOUS, verdict.signal, started)
            if self.alert_on_suspicious_activity:
                self._alert_suspicious(username, candidate, verdict, history)
            raise SuspiciousLoginError(
                f"Suspicious login detected: {verdict.reason}. Please contact administrator.",
                reason=verdict.reason,
                details={"signal": verdict.signal.value, "verdict_id": verdict.verdict_id},
                verdict=verdict,
            )

        outcome = LoginOutcome.ACCEPTED
        if report.multiple_locations:
            outcome = LoginOutcome.ACCEPTED_FLAGGED_MULTILOCATION
            self._alert_multiple_locations(username, report)

        self._record_metrics(outcome, SignalType.NONE, started, report.active_session_count)
        logger.info(
            "Login accepted",
            extra={"user_id": user.user_id, "session_id": session.session_id, "outcome": outcome.value},
        )

        return LoginResult(
            outcome=outcome,
            user_id=user.user_id,
            username=user.username,
            session=session,
            verdict=verdict,
            location_report=report,
        )

    def _build_candidate(
        self,
        username: str,
        secret: str,
        location: LocationInput,
        ip_address: str,
        timestamp_millis: Optional[int],
    ) -> LoginSample:
        """Validate the raw attempt into a LoginSample.

        Raises:
            InvalidInputError: If any required field is missing or malformed
        """
        if not username or not secret or location is None:
            raise InvalidInputError("Username, password, and location are required")

        timestamp = self.sessions.now() if timestamp_millis is None else timestamp_millis

        try:
            point = location if isinstance(location, GeoPoint) else GeoPoint.model_validate(location)
            return LoginSample(location=point, timestamp_millis=timestamp, ip_address=ip_address or "")
        except ValidationError as e:
            raise InvalidInputError(
                "Invalid location or timestamp",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

    def _record_failure(self, username: str, candidate: LoginSample) -> None:
        self.attempts.append(LoginAttemptRecord(
            username=username,
            success=False,
            suspicious=False,
            reason=DetectionConstants.REASON_INVALID_CREDENTIALS,
            location=candidate.location,
            timestamp_millis=candidate.timestamp_millis,
            ip_address=candidate.ip_address,
        ))
        logger.info("Login rejected: invalid credentials", extra={"username": username})

    def _alert_suspicious(
        self,
        username: str,
        candidate: LoginSample,
        verdict: Verdict,
        history: SessionHistory,
    ) -> None:
        previous = None
        if history.recent:
            last = history.recent[-1]
            previous = PreviousLocation(
                latitude=last.location.latitude,
                longitude=last.location.longitude,
                timestamp=last.timestamp_millis,
            )
        details = SuspiciousLoginDetails(
            username=username,
            timestamp_millis=candidate.timestamp_millis,
            reason=verdict.reason,
            ip_address=candidate.ip_address,
            current_location=candidate.location,
            previous_location=previous,
        )
        try:
            self.notifier.notify_suspicious_login(details)
        except NotificationError as e:
            logger.error(f"Suspicious login notification failed: {e}", exc_info=True)
            self._record_notification_failure("suspicious_login")

    def _alert_multiple_locations(self, username: str, report: ActiveLocationReport) -> None:
        details = MultipleLocationsDetails(
            username=username,
            active_session_count=report.active_session_count,
            location_count=report.location_count,
            locations=report.locations,
        )
        try:
            self.notifier.notify_multiple_active_locations(details)
        except NotificationError as e:
            logger.error(f"Multiple locations notification failed: {e}", exc_info=True)
            self._record_notification_failure("multiple_active_locations")

        if self.metrics is not None:
            try:
                self.metrics.record_multi_location_alert(report.location_count)
            except IOError as e:
                logger.error(f"Failed to record metrics: {e}")

    def _record_notification_failure(self, kind: str) -> None:
        if self.metrics is None:
            return
        try:
            self.metrics.record_notification_failure(self.notifier.channel, kind)
        except IOError as e:
            logger.error(f"Failed to record metrics: {e}")

    def _record_metrics(
        self,
        outcome: LoginOutcome,
        signal: SignalType,
        started: float,
        active_sessions: Optional[int] = None,
    ) -> None:
        if self.metrics is None:
            return
        latency_ms = (time.perf_counter() - started) * 1000
        try:
            self.metrics.record_login(outcome, signal, latency_ms, active_sessions)
        except IOError as e:
            logger.error(f"Failed to record metrics: {e}")
