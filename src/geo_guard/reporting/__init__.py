"""Reporting - read-only dashboard queries and the daily summary."""

from geo_guard.reporting.schemas import ActiveLocation, UserDetails, UserSummary
from geo_guard.reporting.service import ReportingService
from geo_guard.reporting.scheduler import DailySummaryScheduler, seconds_until_next_run

__all__ = [
    "ActiveLocation",
    "UserDetails",
    "UserSummary",
    "ReportingService",
    "DailySummaryScheduler",
    "seconds_until_next_run",
]
