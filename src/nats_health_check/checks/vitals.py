"""Server vitals check."""

import logging
from typing import Any

from nats_health_check.checks.base import BaseCheck, NoDataError, WrongTargetError
from nats_health_check.config import VitalsThresholds
from nats_health_check.formatting import humanize_duration
from nats_health_check.models import VitalsSnapshot
from nats_health_check.result import PerfDatum, Result, Unit
from nats_health_check.thresholds import ThresholdPolicy, evaluate

logger = logging.getLogger(__name__)


class VitalsCheck(BaseCheck):
    """Checks requirements, uptime, CPU, memory and connections of one server."""

    name = "vitals"
    thresholds: VitalsThresholds

    def check(self, result: Result, snapshot: VitalsSnapshot | None) -> None:
        if snapshot is None:
            raise NoDataError()

        expected = self.thresholds.server_name
        if expected and snapshot.name != expected:
            raise WrongTargetError(snapshot.name)

        self._require(result, self.thresholds.require_jetstream, snapshot.jetstream_enabled,
                      "JetStream enabled", "JetStream not enabled")
        self._require(result, self.thresholds.require_tls, snapshot.tls_required,
                      "TLS required", "TLS not required")
        self._require(result, self.thresholds.require_auth, snapshot.auth_required,
                      "Authentication required", "Authentication not required")

        t = self.thresholds

        # lower uptime is worse, a restart loop shows as a short uptime
        uptime = snapshot.uptime
        self._measure(
            result, "uptime", "Up", uptime, Unit.SECONDS,
            t.uptime_warning, t.uptime_critical, ThresholdPolicy.DESCENDING,
            humanize_duration(uptime),
        )
        self._measure(
            result, "cpu", "CPU", snapshot.cpu, Unit.PERCENT,
            t.cpu_warning, t.cpu_critical, ThresholdPolicy.ASCENDING,
            f"{snapshot.cpu:.2f}",
        )
        self._measure(
            result, "mem", "Memory", snapshot.memory, Unit.BYTES,
            t.memory_warning, t.memory_critical, ThresholdPolicy.ASCENDING,
            f"{snapshot.memory:.2f}",
        )
        # too few connections can mean clients failed over elsewhere
        self._measure(
            result, "connections", "Connections", snapshot.connections, Unit.COUNT,
            t.connections_warning, t.connections_critical, ThresholdPolicy.AUTO,
            f"{snapshot.connections:.2f}",
        )

    @staticmethod
    def _require(result: Result, required: bool, present: bool, ok: str, failed: str) -> None:
        if not required:
            return
        if present:
            result.add_ok(ok)
        else:
            result.add_critical(failed)

    @staticmethod
    def _measure(
        result: Result,
        key: str,
        label: str,
        value: Any,
        unit: Unit,
        warn: Any,
        crit: Any,
        policy: ThresholdPolicy,
        display: str,
    ) -> None:
        if warn is None and crit is None:
            return

        result.add_perf_data(PerfDatum(key, value, unit, warn=warn, crit=crit))

        evaluation = evaluate(value, warn, crit, policy, label, display)
        if not evaluation.valid:
            logger.warning(f"{label}: warning {warn} and critical {crit} do not suit {policy.value} policy")
        result.record(evaluation)
