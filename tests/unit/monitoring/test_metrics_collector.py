"""Tests for the CloudWatch metrics collector."""

import pytest
from datetime import datetime
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

from geo_guard.core.types import LoginOutcome, SignalType
from geo_guard.monitoring.metrics import MetricPoint, MetricType, MetricsCollector


@pytest.fixture
def cloudwatch():
    with patch("geo_guard.monitoring.metrics.boto3.client") as mock_boto3_client:
        mock_cloudwatch = MagicMock()
        mock_boto3_client.return_value = mock_cloudwatch
        yield mock_cloudwatch


class TestMetricPoint:
    """Tests for MetricPoint dataclass."""

    def test_timestamp_defaults_to_now(self):
        point = MetricPoint(metric_name="login_outcome", value=1.0)

        assert isinstance(point.timestamp, datetime)
        assert point.unit == "None"


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_collector_initialization(self, cloudwatch):
        collector = MetricsCollector(namespace="GeoGuardTest", batch_size=20, region="us-east-1")

        assert collector.namespace == "GeoGuardTest"
        assert collector.region == "us-east-1"
        assert collector.metric_buffer == []

    def test_record_clean_login(self, cloudwatch):
        collector = MetricsCollector(batch_size=100)

        collector.record_login(LoginOutcome.ACCEPTED, SignalType.NONE, latency_ms=1.5, active_sessions=2)

        names = [m.metric_name for m in collector.metric_buffer]
        assert names == [
            MetricType.LOGIN_OUTCOME.value,
            MetricType.DECISION_LATENCY.value,
            MetricType.ACTIVE_SESSIONS.value,
        ]
        assert collector.metric_buffer[0].dimensions == {"outcome": "accepted"}

    def test_record_suspicious_login(self, cloudwatch):
        collector = MetricsCollector(batch_size=100)

        collector.record_login(
            LoginOutcome.REJECTED_SUSPICIOUS, SignalType.IMPOSSIBLE_TRAVEL, latency_ms=2.0
        )

        signal_points = [
            m for m in collector.metric_buffer
            if m.metric_name == MetricType.SUSPICIOUS_SIGNAL.value
        ]
        assert len(signal_points) == 1
        assert signal_points[0].dimensions == {"signal": "impossible_travel"}

    def test_record_alerts(self, cloudwatch):
        collector = MetricsCollector(batch_size=100)

        collector.record_multi_location_alert(3)
        collector.record_notification_failure("email", "suspicious_login")

        assert collector.metric_buffer[0].dimensions == {"location_count": "3"}
        assert collector.metric_buffer[1].dimensions == {"channel": "email", "kind": "suspicious_login"}

    def test_flush(self, cloudwatch):
        collector = MetricsCollector(namespace="GeoGuardTest", batch_size=100)
        collector.record_multi_location_alert(2)

        collector.flush()

        kwargs = cloudwatch.put_metric_data.call_args.kwargs
        assert kwargs["Namespace"] == "GeoGuardTest"
        assert kwargs["MetricData"][0]["Dimensions"] == [{"Name": "location_count", "Value": "2"}]
        assert collector.metric_buffer == []

    def test_flush_splits_large_batches(self, cloudwatch):
        collector = MetricsCollector(batch_size=100)
        for _ in range(45):
            collector.record_multi_location_alert(2)

        collector.flush()

        assert cloudwatch.put_metric_data.call_count == 3

    def test_auto_flush_at_batch_size(self, cloudwatch):
        collector = MetricsCollector(batch_size=3)

        collector.record_login(LoginOutcome.ACCEPTED, SignalType.NONE, latency_ms=1.0, active_sessions=1)

        assert cloudwatch.put_metric_data.called

    def test_flush_failure_raises_ioerror(self, cloudwatch):
        cloudwatch.put_metric_data.side_effect = ClientError(
            {"Error": {"Code": "Throttling", "Message": "Rate exceeded"}}, "PutMetricData"
        )
        collector = MetricsCollector(batch_size=100)
        collector.record_multi_location_alert(2)

        with pytest.raises(IOError):
            collector.flush()

        assert len(collector.metric_buffer) == 1

    def test_shutdown_flushes(self, cloudwatch):
        collector = MetricsCollector(batch_size=100)
        collector.record_multi_location_alert(2)

        collector.shutdown()

        assert cloudwatch.put_metric_data.called

    def test_empty_flush_is_noop(self, cloudwatch):
        MetricsCollector().flush()

        cloudwatch.put_metric_data.assert_not_called()
