"""Suspicion Decision Engine - the only place verdicts are made.

The engine is a pure function of the candidate and the history it is
handed. It never reads storage, never records anything and never
raises; the login service owns all side effects.

Signals:
- Impossible travel: the most implausible recent session drives the reason
- Concurrent locations: enough remote active sessions override the reason
"""

import logging
from typing import Optional, Sequence

from geo_guard.agents.location.agent import ConcurrentLocationAgent
from geo_guard.agents.location.schema import ActiveLocationReport
from geo_guard.agents.travel.agent import ImpossibleTravelAgent, PlausibilityEvaluator
from geo_guard.common.config.settings import DetectionSettings
from geo_guard.data.schemas.session import LoginSample, Session
from geo_guard.orchestration.decision_context import Verdict
from geo_guard.storage.ledger import SessionHistory


logger = logging.getLogger(__name__)


class SuspicionDecisionEngine:
    """Combines the travel and location signals into a verdict.

    Lifecycle of a call to `decide`:
    1. Evaluate the candidate against every recent session
    2. Count remote active sessions
    3. Combine into an immutable Verdict
    """

    def __init__(
        self,
        settings: Optional[DetectionSettings] = None,
        travel_agent: Optional[ImpossibleTravelAgent] = None,
        location_agent: Optional[ConcurrentLocationAgent] = None,
    ):
        """Initialize the engine.

        Args:
            settings: Detection tunables. Defaults if not provided.
            travel_agent: Impossible travel agent. Built from settings if not provided.
            location_agent: Concurrent location agent. Built from settings if not provided.
        """
        self.settings = settings or DetectionSettings()
        self.travel_agent = travel_agent or ImpossibleTravelAgent(
            PlausibilityEvaluator(max_speed_kmh=self.settings.max_travel_speed_kmh)
        )
        self.location_agent = location_agent or ConcurrentLocationAgent(
            location_tolerance_km=self.settings.location_tolerance_km,
            max_concurrent_locations=self.settings.max_concurrent_locations,
        )

    def decide(
        self,
        user_id: str,
        candidate: LoginSample,
        history: SessionHistory,
    ) -> Verdict:
        """Decide whether a credential-verified login is suspicious.

        Args:
            user_id: Owner of the history
            candidate: The incoming login sample
            history: Pre-login view of the user's sessions

        Returns:
            Verdict with the reported reason and both underlying signals
        """
        travel = self.travel_agent.analyze(history.recent, candidate)
        location = self.location_agent.analyze(history.active, candidate)
        verdict = Verdict.create(user_id=user_id, travel=travel, location=location)

        if verdict.suspicious:
            logger.warning("Suspicious login verdict", extra=verdict.to_audit_dict())
        else:
            logger.debug(
                "Login verdict clean",
                extra={"user_id": user_id, "sessions_checked": travel.sessions_checked},
            )

        return verdict

    def check_active_locations(
        self,
        user_id: str,
        active_sessions: Sequence[Session],
    ) -> ActiveLocationReport:
        """Cluster a user's active sessions after an accepted login.

        Can flag multiple live locations even when every pairwise travel
        check was plausible.
        """
        report = self.location_agent.cluster_active(active_sessions)
        if report.multiple_locations:
            logger.warning(
                "Multiple active locations",
                extra={
                    "user_id": user_id,
                    "location_count": report.location_count,
                    "active_session_count": report.active_session_count,
                },
            )
        return report
