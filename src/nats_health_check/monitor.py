"""Running checks against snapshots."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import yaml

from nats_health_check.checks import CHECKS, BaseCheck, CheckError
from nats_health_check.config import Config
from nats_health_check.models import (
    AccountSnapshot,
    ClusterSnapshot,
    Credential,
    StoredMessage,
    VitalsSnapshot,
)
from nats_health_check.result import Result

logger = logging.getLogger(__name__)


class SnapshotError(CheckError):
    """A snapshot file does not describe a valid snapshot."""


SNAPSHOT_TYPES: dict[str, Any] = {
    "vitals": VitalsSnapshot,
    "account": AccountSnapshot,
    "cluster": ClusterSnapshot,
    "credential": Credential,
    "message": StoredMessage,
}


def load_snapshot(kind: str, path: str | Path) -> Any:
    """Load a snapshot for a check from a YAML or JSON file.

    An empty file (or one holding only ``null``) stands for a missing
    snapshot and yields None.

    Raises:
        SnapshotError: When the file cannot be parsed into a snapshot.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SnapshotError(f"invalid {kind} snapshot: {e}") from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise SnapshotError(f"invalid {kind} snapshot: expected a mapping")

    try:
        return SNAPSHOT_TYPES[kind].from_dict(data)
    except KeyError as e:
        raise SnapshotError(f"invalid {kind} snapshot: missing {e}") from e
    except (AttributeError, TypeError, ValueError, OverflowError) as e:
        raise SnapshotError(f"invalid {kind} snapshot: {e}") from e


class CheckRunner:
    """Builds configured checks and runs each against a fresh Result."""

    def __init__(self, config: Config, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize runner.

        Args:
            config: Configuration object.
            clock: Optional source of the current time for all checks.
        """
        self.config = config
        self.clock = clock

    def build(self, kind: str) -> BaseCheck:
        """Create the check named ``kind`` with its configuration section."""
        if kind not in CHECKS:
            raise ValueError(f"Unknown check: {kind}")
        return CHECKS[kind](getattr(self.config, kind), clock=self.clock)

    def run(self, kind: str, snapshot: Any) -> Result:
        """Run one check.

        Args:
            kind: Check name, one of ``CHECKS``.
            snapshot: Snapshot the check evaluates, None when absent.

        Returns:
            The populated Result.

        Raises:
            CheckError: When the snapshot cannot be evaluated.
        """
        check = self.build(kind)
        result = Result(check=kind)

        logger.info(f"Running {kind} check")
        check.check(result, snapshot)
        logger.info(
            f"{kind} check {result.status.value}: {len(result.criticals)} critical, "
            f"{len(result.warnings)} warning, {len(result.oks)} ok"
        )
        return result
