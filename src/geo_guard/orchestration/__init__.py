"""Orchestration - combining signals into a verdict.

Components:
- Verdict: Immutable outcome of one decision
- SuspicionDecisionEngine: The only place verdicts are made
"""

from geo_guard.orchestration.decision_context import Verdict
from geo_guard.orchestration.decision_flow import SuspicionDecisionEngine

__all__ = [
    "Verdict",
    "SuspicionDecisionEngine",
]
