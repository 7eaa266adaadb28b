"""Concurrent Location Agent - module init."""

from geo_guard.agents.location.agent import ConcurrentLocationAgent
from geo_guard.agents.location.schema import ActiveLocationReport, ClusterPoint, LocationSignal

__all__ = ["ConcurrentLocationAgent", "ActiveLocationReport", "ClusterPoint", "LocationSignal"]
