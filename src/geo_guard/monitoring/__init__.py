"""Monitoring - CloudWatch metrics for login decisions."""

from geo_guard.monitoring.metrics import MetricPoint, MetricType, MetricsCollector

__all__ = ["MetricPoint", "MetricType", "MetricsCollector"]
