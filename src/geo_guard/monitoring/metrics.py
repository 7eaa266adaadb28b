"""Monitoring - track login outcomes, signal firing rates, alert delivery and latency."""

import logging, os
from datetime import datetime, timezone
from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum

import boto3
from botocore.exceptions import ClientError

from geo_guard.core.types import LoginOutcome, SignalType

logger = logging.getLogger(__name__)


class MetricType(str, Enum):
    LOGIN_OUTCOME = "login_outcome"
    SUSPICIOUS_SIGNAL = "suspicious_signal"
    MULTI_LOCATION_ALERT = "multi_location_alert"
    NOTIFICATION_FAILURE = "notification_failure"
    DECISION_LATENCY = "decision_latency"
    ACTIVE_SESSIONS = "active_sessions"


@dataclass
class MetricPoint:
    metric_name: str
    value: float
    unit: str = "None"
    timestamp: Optional[datetime] = None
    dimensions: Optional[Dict[str, str]] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)


class MetricsCollector:
    """Collects and publishes metrics to CloudWatch."""

    DEFAULT_REGION = "us-east-1"
    DEFAULT_NAMESPACE = "GeoGuard"
    MAX_METRICS_PER_REQUEST = 20

    def __init__(self, namespace: Optional[str] = None, region: Optional[str] = None,
                 aws_profile: Optional[str] = None, batch_size: int = 20):
        self.namespace = namespace or os.environ.get("CLOUDWATCH_NAMESPACE", self.DEFAULT_NAMESPACE)
        self.region = region or os.environ.get("AWS_REGION", self.DEFAULT_REGION)
        self.batch_size = batch_size
        self.metric_buffer: List[MetricPoint] = []

        if aws_profile:
            session = boto3.Session(profile_name=aws_profile)
            self.cloudwatch = session.client("cloudwatch", region_name=self.region)
        else:
            self.cloudwatch = boto3.client("cloudwatch", region_name=self.region)

        logger.info(f"Initialized MetricsCollector: namespace={self.namespace}")

    def record_metric(self, metric: MetricPoint) -> None:
        """Record a metric point.

        Buffers metrics for batch publishing.

        Args:
            metric: MetricPoint to record
        """
        self.metric_buffer.append(metric)

        if len(self.metric_buffer) >= self.batch_size:
            self.flush()

    def record_login(
        self,
        outcome: LoginOutcome,
        signal: SignalType,
        latency_ms: float,
        active_sessions: Optional[int] = None,
    ) -> None:
        """Record metrics for one processed login attempt.

        Args:
            outcome: Terminal state of the attempt
            signal: Signal that drove the verdict (NONE when clean or not evaluated)
            latency_ms: Time spent deciding, in milliseconds
            active_sessions: Active sessions after the attempt, if known
        """
        self.record_metric(MetricPoint(
            metric_name=MetricType.LOGIN_OUTCOME.value,
            value=1.0,
            unit="Count",
            dimensions={"outcome": outcome.value},
        ))

        if signal != SignalType.NONE:
            self.record_metric(MetricPoint(
                metric_name=MetricType.SUSPICIOUS_SIGNAL.value,
                value=1.0,
                unit="Count",
                dimensions={"signal": signal.value},
            ))

        self.record_metric(MetricPoint(
            metric_name=MetricType.DECISION_LATENCY.value,
            value=latency_ms,
            unit="Milliseconds",
        ))

        if active_sessions is not None:
            self.record_metric(MetricPoint(
                metric_name=MetricType.ACTIVE_SESSIONS.value,
                value=float(active_sessions),
                unit="Count",
            ))

    def record_multi_location_alert(self, location_count: int) -> None:
        """Record a post-login multiple-active-locations alert."""
        self.record_metric(MetricPoint(
            metric_name=MetricType.MULTI_LOCATION_ALERT.value,
            value=1.0,
            unit="Count",
            dimensions={"location_count": str(location_count)},
        ))

    def record_notification_failure(self, channel: str, kind: str) -> None:
        """Record an alert that could not be delivered.

        Args:
            channel: Delivery channel (email, log, ...)
            kind: Which alert failed
        """
        self.record_metric(MetricPoint(
            metric_name=MetricType.NOTIFICATION_FAILURE.value,
            value=1.0,
            unit="Count",
            dimensions={
                "channel": channel,
                "kind": kind,
            },
        ))

    def flush(self) -> None:
        """Flush buffered metrics to CloudWatch.

        Raises:
            IOError: If CloudWatch write fails
        """
        if not self.metric_buffer:
            return

        try:
            metric_data = []
            for metric in self.metric_buffer:
                metric_dict = {
                    "MetricName": metric.metric_name,
                    "Value": metric.value,
                    "Unit": metric.unit,
                    "Timestamp": metric.timestamp,
                }

                if metric.dimensions:
                    metric_dict["Dimensions"] = [
                        {"Name": k, "Value": str(v)}
                        for k, v in metric.dimensions.items()
                    ]

                metric_data.append(metric_dict)

            for i in range(0, len(metric_data), self.MAX_METRICS_PER_REQUEST):
                batch = metric_data[i:i + self.MAX_METRICS_PER_REQUEST]
                self.cloudwatch.put_metric_data(
                    Namespace=self.namespace,
                    MetricData=batch,
                )

            logger.debug(f"Published {len(self.metric_buffer)} metrics to CloudWatch")
            self.metric_buffer.clear()

        except ClientError as e:
            logger.error(f"Failed to publish metrics: {e}")
            raise IOError(f"CloudWatch write failed: {e}") from e

    def shutdown(self) -> None:
        """Flush remaining metrics on shutdown."""
        self.flush()
