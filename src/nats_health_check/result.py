"""Check results and performance data."""

import math
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

from nats_health_check.models import Status
from nats_health_check.thresholds import Evaluation


class Unit(str, Enum):
    """Units appended to perf data values."""

    BYTES = "B"
    SECONDS = "s"
    PERCENT = "%"
    COUNT = ""


def format_value(value: Any, unit: Unit) -> str:
    """Format a measured perf data number the way its unit requires."""
    if unit is Unit.PERCENT:
        return str(math.trunc(value))
    return format_threshold(value, unit)


def format_threshold(value: Any, unit: Unit) -> str:
    """Format a configured threshold or bound without truncating it."""
    if isinstance(value, timedelta):
        value = value.total_seconds()
    if unit is Unit.SECONDS:
        return f"{value:.4f}"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


@dataclass(frozen=True)
class PerfDatum:
    """One measured quantity.

    Renders as ``label=value[unit][;warn;crit[;min;max]]``. Thresholds are
    the configured values, never reordered.
    """

    label: str
    value: Any
    unit: Unit = Unit.COUNT
    warn: Any = None
    crit: Any = None
    minimum: Any = None
    maximum: Any = None

    def __str__(self) -> str:
        fields = [
            "" if v is None else format_threshold(v, self.unit)
            for v in (self.warn, self.crit, self.minimum, self.maximum)
        ]
        while fields and not fields[-1]:
            fields.pop()

        pd = f"{self.label}={format_value(self.value, self.unit)}{self.unit.value}"
        if fields:
            pd = ";".join([pd, *fields])
        return pd


@dataclass
class Result:
    """Findings and perf data gathered by one check run.

    Not safe for concurrent use, each run gets its own Result.
    """

    check: str = ""
    oks: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    criticals: list[str] = field(default_factory=list)
    perf_data: list[PerfDatum] = field(default_factory=list)

    def add_ok(self, message: str) -> None:
        self.oks.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_critical(self, message: str) -> None:
        self.criticals.append(message)

    def add_perf_data(self, datum: PerfDatum) -> None:
        self.perf_data.append(datum)

    def record(self, evaluation: Evaluation) -> None:
        """Append an evaluation's message to the matching category."""
        if evaluation.status is Status.CRITICAL:
            self.add_critical(evaluation.message)
        elif evaluation.status is Status.WARNING:
            self.add_warning(evaluation.message)
        else:
            self.add_ok(evaluation.message)

    def is_empty(self, category: Status) -> bool:
        """Whether no finding of this category has been recorded."""
        return not {
            Status.OK: self.oks,
            Status.WARNING: self.warnings,
            Status.CRITICAL: self.criticals,
        }.get(category, [])

    @property
    def status(self) -> Status:
        """Overall status, the worst category with findings."""
        if self.criticals:
            return Status.CRITICAL
        elif self.warnings:
            return Status.WARNING
        return Status.OK

    def render(self) -> str:
        """Perf data line, items separated by spaces."""
        return " ".join(str(pd) for pd in self.perf_data)

    def render_nagios(self) -> str:
        """Single line plugin output with perf data after the pipe."""
        parts = [f"{self.check} {self.status.value}".strip()]
        if self.criticals:
            parts.append("Crit:" + ", ".join(self.criticals))
        if self.warnings:
            parts.append("Warn:" + ", ".join(self.warnings))
        if self.oks:
            parts.append("OK:" + ", ".join(self.oks))

        line = " ".join(parts)
        perf = self.render()
        if perf:
            line = f"{line} | {perf}"
        return line

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "check": self.check,
            "status": self.status.value,
            "criticals": list(self.criticals),
            "warnings": list(self.warnings),
            "oks": list(self.oks),
            "perf_data": [str(pd) for pd in self.perf_data],
        }
