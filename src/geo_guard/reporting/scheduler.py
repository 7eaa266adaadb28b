"""Daily Summary Scheduler - sends the summary once a day at a fixed hour."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from geo_guard.common.constants import ReportingConstants
from geo_guard.notifications.port import NotificationPort
from geo_guard.reporting.service import ReportingService


logger = logging.getLogger(__name__)


def seconds_until_next_run(now: datetime, hour: int) -> float:
    """Seconds from `now` until the next occurrence of `hour`:00, tomorrow at the earliest."""
    next_run = (now + timedelta(days=1)).replace(hour=hour, minute=0, second=0, microsecond=0)
    return (next_run - now).total_seconds()


class DailySummaryScheduler:
    """Background timer that delivers the daily summary."""

    def __init__(
        self,
        reporting: ReportingService,
        notifier: NotificationPort,
        hour: int = ReportingConstants.DAILY_SUMMARY_HOUR,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the scheduler.

        Args:
            reporting: Source of the summary
            notifier: Delivery channel
            hour: Local hour of day to send at
            now: Clock for computing the next run. datetime.now if not provided.
        """
        self.reporting = reporting
        self.notifier = notifier
        self.hour = hour
        self._now = now or datetime.now

        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._stopped = True

    @property
    def running(self) -> bool:
        return not self._stopped

    def start(self) -> None:
        """Schedule the first run."""
        with self._lock:
            self._stopped = False
        self._schedule_next()

    def stop(self) -> None:
        """Cancel any pending run."""
        with self._lock:
            self._stopped = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        logger.info("Daily summary scheduler stopped")

    def _schedule_next(self) -> None:
        with self._lock:
            if self._stopped:
                return
            now = self._now()
            delay = seconds_until_next_run(now, self.hour)
            self._timer = threading.Timer(delay, self._run)
            self._timer.daemon = True
            self._timer.name = "DailySummary"
            self._timer.start()
        logger.info(f"Daily summary scheduled for {now + timedelta(seconds=delay)}")

    def _run(self) -> None:
        try:
            self.reporting.send_daily_summary(self.notifier)
        except Exception as e:
            # Keep the schedule alive whatever happened in this run
            logger.error(f"Daily summary run failed: {e}", exc_info=True)
        finally:
            self._schedule_next()
