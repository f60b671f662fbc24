"""Configuration management for NATS health checks."""

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from nats_health_check.formatting import parse_duration, short_duration


def _duration(data: dict[str, Any], key: str, default: timedelta | None = None) -> timedelta | None:
    value = data.get(key)
    if value is None:
        return default
    return parse_duration(value)


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    out = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, timedelta):
            value = short_duration(value)
        out[key] = value
    return out


@dataclass
class VitalsThresholds:
    """Server vitals requirements and thresholds.

    Numeric checks run only when at least one of their thresholds is set.
    """

    server_name: str | None = None
    require_jetstream: bool = False
    require_tls: bool = False
    require_auth: bool = False
    uptime_warning: timedelta | None = None
    uptime_critical: timedelta | None = None
    cpu_warning: float | None = None
    cpu_critical: float | None = None
    memory_warning: int | None = None  # bytes
    memory_critical: int | None = None
    connections_warning: int | None = None
    connections_critical: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VitalsThresholds":
        return cls(
            server_name=data.get("server_name"),
            require_jetstream=data.get("require_jetstream", False),
            require_tls=data.get("require_tls", False),
            require_auth=data.get("require_auth", False),
            uptime_warning=_duration(data, "uptime_warning"),
            uptime_critical=_duration(data, "uptime_critical"),
            cpu_warning=data.get("cpu_warning"),
            cpu_critical=data.get("cpu_critical"),
            memory_warning=data.get("memory_warning"),
            memory_critical=data.get("memory_critical"),
            connections_warning=data.get("connections_warning"),
            connections_critical=data.get("connections_critical"),
        )


@dataclass
class AccountThresholds:
    """Percentage of server enforced account limits."""

    memory_warning: int | None = 75
    memory_critical: int | None = 90
    storage_warning: int | None = 75
    storage_critical: int | None = 90
    streams_warning: int | None = None
    streams_critical: int | None = None
    consumers_warning: int | None = None
    consumers_critical: int | None = None

    def for_resource(self, resource: str) -> tuple[int | None, int | None]:
        """Get (warning, critical) percentages for a resource."""
        return getattr(self, f"{resource}_warning"), getattr(self, f"{resource}_critical")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountThresholds":
        return cls(
            memory_warning=data.get("memory_warning", 75),
            memory_critical=data.get("memory_critical", 90),
            storage_warning=data.get("storage_warning", 75),
            storage_critical=data.get("storage_critical", 90),
            streams_warning=data.get("streams_warning"),
            streams_critical=data.get("streams_critical"),
            consumers_warning=data.get("consumers_warning"),
            consumers_critical=data.get("consumers_critical"),
        )


@dataclass
class ClusterThresholds:
    """Meta cluster expectations."""

    expected_peers: int | None = None
    seen_critical: timedelta = timedelta(seconds=10)
    lag_critical: int = 100  # operations

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterThresholds":
        return cls(
            expected_peers=data.get("expected_peers"),
            seen_critical=_duration(data, "seen_critical", timedelta(seconds=10)),
            lag_critical=data.get("lag_critical", 100),
        )


@dataclass
class CredentialThresholds:
    """Remaining validity of a user credential."""

    path: str | None = None
    require_expiry: bool = False
    validity_warning: timedelta | None = None
    validity_critical: timedelta | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CredentialThresholds":
        return cls(
            path=data.get("path"),
            require_expiry=data.get("require_expiry", False),
            validity_warning=_duration(data, "validity_warning"),
            validity_critical=_duration(data, "validity_critical"),
        )


@dataclass
class MessageThresholds:
    """Freshness of the last message on a stream subject."""

    stream: str = ""
    subject: str = ""
    age_warning: timedelta | None = None
    age_critical: timedelta | None = None
    body_as_timestamp: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageThresholds":
        return cls(
            stream=data.get("stream", ""),
            subject=data.get("subject", ""),
            age_warning=_duration(data, "age_warning"),
            age_critical=_duration(data, "age_critical"),
            body_as_timestamp=data.get("body_as_timestamp", False),
        )


@dataclass
class Config:
    """Main configuration for NATS health checks."""

    vitals: VitalsThresholds = field(default_factory=VitalsThresholds)
    account: AccountThresholds = field(default_factory=AccountThresholds)
    cluster: ClusterThresholds = field(default_factory=ClusterThresholds)
    credential: CredentialThresholds = field(default_factory=CredentialThresholds)
    message: MessageThresholds = field(default_factory=MessageThresholds)
    monitor_url: str = "http://localhost:8222"
    log_level: str = "WARNING"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        return cls(
            vitals=VitalsThresholds.from_dict(data.get("vitals") or {}),
            account=AccountThresholds.from_dict(data.get("account") or {}),
            cluster=ClusterThresholds.from_dict(data.get("cluster") or {}),
            credential=CredentialThresholds.from_dict(data.get("credential") or {}),
            message=MessageThresholds.from_dict(data.get("message") or {}),
            monitor_url=data.get("monitor_url", "http://localhost:8222"),
            log_level=data.get("log_level", "WARNING"),
        )

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self._to_dict(), f, default_flow_style=False, sort_keys=False)

    def _to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization, unset values left out."""
        return {
            "monitor_url": self.monitor_url,
            "log_level": self.log_level,
            "vitals": _drop_none(vars(self.vitals)),
            "account": dict(vars(self.account)),
            "cluster": _drop_none(vars(self.cluster)),
            "credential": _drop_none(vars(self.credential)),
            "message": _drop_none(vars(self.message)),
        }


def create_example_config() -> Config:
    """Create an example configuration for documentation."""
    return Config(
        vitals=VitalsThresholds(
            server_name="nats-1",
            require_jetstream=True,
            require_tls=True,
            uptime_warning=timedelta(minutes=20),
            uptime_critical=timedelta(minutes=10),
            cpu_warning=70.0,
            cpu_critical=90.0,
            connections_warning=1300,
            connections_critical=1500,
        ),
        account=AccountThresholds(),
        cluster=ClusterThresholds(
            expected_peers=3,
            seen_critical=timedelta(seconds=10),
            lag_critical=100,
        ),
        credential=CredentialThresholds(
            path="~/.nkeys/creds/monitor.creds",
            require_expiry=True,
            validity_warning=timedelta(days=30),
            validity_critical=timedelta(days=7),
        ),
        message=MessageThresholds(
            stream="ORDERS",
            subject="ORDERS.heartbeat",
            age_warning=timedelta(minutes=5),
            age_critical=timedelta(minutes=15),
            body_as_timestamp=True,
        ),
    )
