"""Tests for the daily summary scheduler."""

from datetime import datetime
from unittest.mock import MagicMock, patch

from geo_guard.notifications.port import NotificationPort
from geo_guard.reporting.scheduler import DailySummaryScheduler, seconds_until_next_run
from geo_guard.reporting.service import ReportingService


FIXED_NOW = datetime(2026, 1, 28, 8, 30, 0)


class TestSecondsUntilNextRun:
    """Tests for next-run computation."""

    def test_targets_tomorrow(self):
        """Even before today's hour, the next run is tomorrow."""
        delay = seconds_until_next_run(FIXED_NOW, 9)

        assert delay == 24.5 * 3600

    def test_after_the_hour(self):
        delay = seconds_until_next_run(datetime(2026, 1, 28, 10, 0, 0), 9)

        assert delay == 23 * 3600

    def test_month_rollover(self):
        delay = seconds_until_next_run(datetime(2026, 1, 31, 9, 0, 0), 9)

        assert delay == 24 * 3600


class TestDailySummaryScheduler:
    """Tests for DailySummaryScheduler."""

    def make_scheduler(self):
        reporting = MagicMock(spec=ReportingService)
        notifier = MagicMock(spec=NotificationPort)
        return DailySummaryScheduler(reporting, notifier, hour=9, now=lambda: FIXED_NOW)

    @patch("geo_guard.reporting.scheduler.threading.Timer")
    def test_start_schedules_daemon_timer(self, mock_timer):
        scheduler = self.make_scheduler()

        scheduler.start()

        delay = mock_timer.call_args[0][0]
        assert delay == 24.5 * 3600
        assert mock_timer.return_value.daemon is True
        mock_timer.return_value.start.assert_called_once()
        assert scheduler.running

    @patch("geo_guard.reporting.scheduler.threading.Timer")
    def test_stop_cancels(self, mock_timer):
        scheduler = self.make_scheduler()
        scheduler.start()

        scheduler.stop()

        mock_timer.return_value.cancel.assert_called_once()
        assert not scheduler.running

    @patch("geo_guard.reporting.scheduler.threading.Timer")
    def test_run_sends_and_reschedules(self, mock_timer):
        scheduler = self.make_scheduler()
        scheduler.start()

        scheduler._run()

        scheduler.reporting.send_daily_summary.assert_called_once_with(scheduler.notifier)
        assert mock_timer.call_count == 2

    @patch("geo_guard.reporting.scheduler.threading.Timer")
    def test_run_survives_errors(self, mock_timer):
        scheduler = self.make_scheduler()
        scheduler.reporting.send_daily_summary.side_effect = RuntimeError("boom")
        scheduler.start()

        scheduler._run()

        assert mock_timer.call_count == 2

    @patch("geo_guard.reporting.scheduler.threading.Timer")
    def test_no_reschedule_after_stop(self, mock_timer):
        scheduler = self.make_scheduler()
        scheduler.start()
        scheduler.stop()

        scheduler._run()

        assert mock_timer.call_count == 1
