"""JetStream account limits check."""

from nats_health_check.checks.base import BaseCheck, NoDataError
from nats_health_check.config import AccountThresholds
from nats_health_check.models import AccountSnapshot, ResourceUsage, Status
from nats_health_check.result import PerfDatum, Result, Unit
from nats_health_check.thresholds import ThresholdPolicy, evaluate

_UNITS = {
    "memory": Unit.BYTES,
    "storage": Unit.BYTES,
}


def usage_percent(usage: ResourceUsage) -> int:
    """Truncated percentage of the limit in use, 0 when unlimited."""
    if usage.limit <= 0:
        return 0
    return usage.used * 100 // usage.limit


class AccountCheck(BaseCheck):
    """Checks account resource usage against the server enforced limits."""

    name = "account"
    thresholds: AccountThresholds

    def check(self, result: Result, snapshot: AccountSnapshot | None) -> None:
        if snapshot is None:
            raise NoDataError()

        for item, usage in snapshot.resources():
            self._check_resource(result, item, usage)

    def _check_resource(self, result: Result, item: str, usage: ResourceUsage) -> None:
        warn, crit = self.thresholds.for_resource(item)
        pct = usage_percent(usage)

        result.add_perf_data(PerfDatum(item, usage.used, _UNITS.get(item, Unit.COUNT)))
        result.add_perf_data(PerfDatum(f"{item}_pct", pct, Unit.PERCENT, warn=warn, crit=crit))

        if usage.limit > 0 and usage.used > usage.limit:
            result.add_critical(f"{item}: exceed server limits")

        if usage.limit <= 0 or (warn is None and crit is None):
            return

        evaluation = evaluate(pct, warn, crit, ThresholdPolicy.ASCENDING, item)
        if not evaluation.valid:
            result.add_critical(f"{item}: invalid thresholds")
        elif evaluation.status is Status.CRITICAL:
            result.add_critical(f"{pct}% {item}")
        elif evaluation.status is Status.WARNING:
            result.add_warning(f"{pct}% {item}")
        else:
            result.add_ok(f"{pct}% {item}")
