"""Credential expiry check."""

from nats_health_check.checks.base import BaseCheck, NoDataError
from nats_health_check.config import CredentialThresholds
from nats_health_check.formatting import format_instant, humanize_duration
from nats_health_check.models import Credential, Status
from nats_health_check.result import PerfDatum, Result, Unit
from nats_health_check.thresholds import ThresholdPolicy, evaluate


class CredentialCheck(BaseCheck):
    """Checks how long a user credential stays valid."""

    name = "credential"
    thresholds: CredentialThresholds

    def check(self, result: Result, snapshot: Credential | None) -> None:
        if snapshot is None:
            raise NoDataError()

        t = self.thresholds

        if snapshot.expires_at is None:
            if t.require_expiry:
                result.add_critical("never expires")
            else:
                result.add_ok("never expires")
            return

        remaining = snapshot.expires_at - self.clock()
        result.add_perf_data(PerfDatum(
            "expiry", remaining, Unit.SECONDS, warn=t.validity_warning, crit=t.validity_critical,
        ))

        evaluation = evaluate(
            remaining, t.validity_warning, t.validity_critical, ThresholdPolicy.DESCENDING, "credential",
        )
        if not evaluation.valid:
            result.add_critical("credential: invalid thresholds")
        elif evaluation.status is Status.CRITICAL:
            result.add_critical(f"expires sooner than {humanize_duration(t.validity_critical)}")
        elif evaluation.status is Status.WARNING:
            result.add_warning(f"expires sooner than {humanize_duration(t.validity_warning)}")
        else:
            result.add_ok(f"expires in {format_instant(snapshot.expires_at)}")
