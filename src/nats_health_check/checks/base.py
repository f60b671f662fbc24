"""Base check interface."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable

from nats_health_check.result import Result


class CheckError(Exception):
    """A check could not evaluate its input at all."""


class NoDataError(CheckError):
    """The snapshot to evaluate is missing."""

    def __init__(self, message: str = "no data received") -> None:
        super().__init__(message)


class WrongTargetError(CheckError):
    """The snapshot came from a different server than expected."""

    def __init__(self, name: str) -> None:
        super().__init__(f"result from {name}")
        self.name = name


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseCheck(ABC):
    """Abstract base class for check policies.

    A check reads one snapshot and appends findings and perf data to the
    Result it is given. It keeps no state between runs.
    """

    name: str = ""

    def __init__(self, thresholds: Any, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize check.

        Args:
            thresholds: The configuration section for this check.
            clock: Source of the current time, defaults to UTC now.
        """
        self.thresholds = thresholds
        self.clock = clock or utcnow

    @abstractmethod
    def check(self, result: Result, snapshot: Any) -> None:
        """Evaluate a snapshot into a result.

        Raises:
            CheckError: When the snapshot cannot be evaluated. Nothing is
                added to the result in that case.
        """
        ...
