"""Telemetry collectors."""

from nats_health_check.collectors.base import BaseCollector, CollectorError
from nats_health_check.collectors.monitoring import MonitoringCollector

__all__ = ["BaseCollector", "CollectorError", "MonitoringCollector"]
