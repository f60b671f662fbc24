"""Stream message freshness check."""

from datetime import datetime, timezone

from nats_health_check.checks.base import BaseCheck
from nats_health_check.config import MessageThresholds
from nats_health_check.formatting import humanize_duration
from nats_health_check.models import Status, StoredMessage
from nats_health_check.result import PerfDatum, Result, Unit
from nats_health_check.thresholds import ThresholdPolicy, evaluate


class MessageCheck(BaseCheck):
    """Checks the age of the last message stored for a stream subject.

    The age is measured from the publish time, or from the message body
    read as Unix seconds when ``body_as_timestamp`` is set.
    """

    name = "message"
    thresholds: MessageThresholds

    def check(self, result: Result, snapshot: StoredMessage | None) -> None:
        if snapshot is None:
            result.add_critical("no message found")
            return

        t = self.thresholds

        if t.body_as_timestamp:
            body = snapshot.data.decode(errors="replace").strip()
            try:
                timestamp = datetime.fromtimestamp(int(body), tz=timezone.utc)
            except (ValueError, OverflowError, OSError):
                result.add_critical(f"invalid timestamp body: {body}")
                return
        else:
            timestamp = snapshot.published

        age = self.clock() - timestamp
        result.add_perf_data(PerfDatum("age", age, Unit.SECONDS, warn=t.age_warning, crit=t.age_critical))

        evaluation = evaluate(
            age, t.age_warning, t.age_critical, ThresholdPolicy.ASCENDING,
            "Message age", humanize_duration(age),
        )
        if not evaluation.valid:
            result.add_critical("message: invalid thresholds")
        elif evaluation.status is Status.OK:
            result.add_ok(f"Valid message on {t.stream} > {t.subject}")
        else:
            result.record(evaluation)
