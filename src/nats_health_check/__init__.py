"""
NATS Health Check - threshold based health checks for NATS deployments.

Evaluates server vitals, JetStream account limits, meta cluster peers,
credential expiry and stream message freshness against warning and critical
thresholds, producing Nagios style findings and performance data.
"""

__version__ = "1.0.0"

from nats_health_check.config import Config
from nats_health_check.models import Status
from nats_health_check.monitor import CheckRunner
from nats_health_check.result import PerfDatum, Result, Unit
from nats_health_check.thresholds import Evaluation, ThresholdPolicy, evaluate

__all__ = [
    "CheckRunner",
    "Config",
    "Evaluation",
    "PerfDatum",
    "Result",
    "Status",
    "ThresholdPolicy",
    "Unit",
    "evaluate",
]
