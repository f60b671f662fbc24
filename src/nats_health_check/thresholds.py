"""Directional threshold evaluation.

Every numeric sub-check goes through :func:`evaluate`, stating the policy
that fits its metric:

* ``ASCENDING`` - higher is worse, valid only when ``warn < crit``
* ``DESCENDING`` - lower is worse, valid only when ``crit < warn``
* ``AUTO`` - direction follows the thresholds, ``crit >= warn`` is
  ascending and anything else descending; never invalid

Comparisons are inclusive, a value equal to a threshold lands in the worse
category. A threshold of ``None`` is not configured and can never be
breached.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from nats_health_check.models import Status


class ThresholdPolicy(str, Enum):
    """Which direction is worse for a metric."""

    ASCENDING = "ascending"
    DESCENDING = "descending"
    AUTO = "auto"

    def is_valid(self, warn: Any, crit: Any) -> bool:
        """Whether the warn/crit pair is a usable configuration."""
        if warn is None or crit is None:
            return True
        if self is ThresholdPolicy.ASCENDING:
            return warn < crit
        if self is ThresholdPolicy.DESCENDING:
            return crit < warn
        return True

    def resolve(self, warn: Any, crit: Any) -> "ThresholdPolicy":
        """Concrete direction, inferring it for ``AUTO``."""
        if self is not ThresholdPolicy.AUTO:
            return self
        if warn is None or crit is None or crit >= warn:
            return ThresholdPolicy.ASCENDING
        return ThresholdPolicy.DESCENDING


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one value."""

    status: Status
    message: str
    valid: bool = True


def _breached(value: Any, threshold: Any, direction: ThresholdPolicy) -> bool:
    if threshold is None:
        return False
    if direction is ThresholdPolicy.ASCENDING:
        return value >= threshold
    return value <= threshold


def evaluate(
    value: Any,
    warn: Any,
    crit: Any,
    policy: ThresholdPolicy,
    label: str,
    display: str | None = None,
) -> Evaluation:
    """Classify a value against a warn/crit pair.

    Args:
        value: Measured value, anything ordered (numbers, timedeltas).
        warn: Warning threshold or None.
        crit: Critical threshold or None.
        policy: Direction policy for this metric.
        label: Human name of the metric, prefixes the message.
        display: How to show the value in the message, defaults to ``str(value)``.

    Returns:
        Evaluation whose message reads ``"<label> <display>"``, or
        ``"<label> invalid thresholds"`` with ``valid=False`` when the
        thresholds do not suit the policy.
    """
    if not policy.is_valid(warn, crit):
        return Evaluation(Status.CRITICAL, f"{label} invalid thresholds", valid=False)

    direction = policy.resolve(warn, crit)
    message = f"{label} {value if display is None else display}"

    if _breached(value, crit, direction):
        return Evaluation(Status.CRITICAL, message)
    if _breached(value, warn, direction):
        return Evaluation(Status.WARNING, message)
    return Evaluation(Status.OK, message)
