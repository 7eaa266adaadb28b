"""Agents - independent signal producers.

- ImpossibleTravelAgent: travel speed between recent sessions and the attempt
- ConcurrentLocationAgent: simultaneous active sessions from distinct places
"""

from geo_guard.agents.travel import ImpossibleTravelAgent, PlausibilityEvaluator
from geo_guard.agents.location import ConcurrentLocationAgent

__all__ = ["ImpossibleTravelAgent", "PlausibilityEvaluator", "ConcurrentLocationAgent"]
