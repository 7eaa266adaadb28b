"""Impossible Travel Agent - module init."""

from geo_guard.agents.travel.agent import ImpossibleTravelAgent, PlausibilityEvaluator
from geo_guard.agents.travel.schema import TravelEvaluation, TravelSignal

__all__ = ["ImpossibleTravelAgent", "PlausibilityEvaluator", "TravelEvaluation", "TravelSignal"]
