"""Data models for health checks."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from nats_health_check.formatting import parse_duration, parse_instant


class Status(str, Enum):
    """Check status levels."""

    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def exit_code(self) -> int:
        """Nagios plugin exit code for this status."""
        return {
            Status.OK: 0,
            Status.WARNING: 1,
            Status.CRITICAL: 2,
        }.get(self, 3)


@dataclass(frozen=True)
class VitalsSnapshot:
    """Server level variables as reported by a single server."""

    name: str
    jetstream_enabled: bool = False
    tls_required: bool = False
    auth_required: bool = False
    cpu: float = 0.0
    connections: int = 0
    memory: int = 0
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    start: datetime | None = None

    @property
    def uptime(self) -> timedelta:
        if self.start is None:
            return timedelta(0)
        return self.now - self.start

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VitalsSnapshot":
        now = parse_instant(data["now"]) if "now" in data else datetime.now(timezone.utc)
        start = parse_instant(data["start"]) if data.get("start") else None
        return cls(
            name=data.get("name", ""),
            jetstream_enabled=data.get("jetstream_enabled", False),
            tls_required=data.get("tls_required", False),
            auth_required=data.get("auth_required", False),
            cpu=float(data.get("cpu", 0.0)),
            connections=int(data.get("connections", 0)),
            memory=int(data.get("memory", 0)),
            now=now,
            start=start,
        )


@dataclass(frozen=True)
class ResourceUsage:
    """Usage of one account resource against its server enforced limit.

    A limit of 0 means the resource is unlimited.
    """

    used: int = 0
    limit: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResourceUsage":
        return cls(used=int(data.get("used", 0)), limit=int(data.get("limit", 0)))


@dataclass(frozen=True)
class AccountSnapshot:
    """JetStream resource usage for a single account."""

    memory: ResourceUsage = field(default_factory=ResourceUsage)
    storage: ResourceUsage = field(default_factory=ResourceUsage)
    streams: ResourceUsage = field(default_factory=ResourceUsage)
    consumers: ResourceUsage = field(default_factory=ResourceUsage)

    def resources(self) -> list[tuple[str, ResourceUsage]]:
        """Resources in reporting order."""
        return [
            ("memory", self.memory),
            ("storage", self.storage),
            ("streams", self.streams),
            ("consumers", self.consumers),
        ]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountSnapshot":
        return cls(
            memory=ResourceUsage.from_dict(data.get("memory", {})),
            storage=ResourceUsage.from_dict(data.get("storage", {})),
            streams=ResourceUsage.from_dict(data.get("streams", {})),
            consumers=ResourceUsage.from_dict(data.get("consumers", {})),
        )


@dataclass(frozen=True)
class PeerInfo:
    """A replica taking part in the meta group."""

    name: str
    current: bool = False
    offline: bool = False
    active: timedelta = timedelta(0)  # since last seen by the leader
    lag: int = 0  # operations behind the leader

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PeerInfo":
        return cls(
            name=data["name"],
            current=data.get("current", False),
            offline=data.get("offline", False),
            active=parse_duration(data.get("active", 0)),
            lag=int(data.get("lag", 0)),
        )


@dataclass(frozen=True)
class ClusterSnapshot:
    """Meta cluster state as seen from one server."""

    leader: str = ""
    replicas: list[PeerInfo] = field(default_factory=list)

    @property
    def peer_count(self) -> int:
        """Replicas plus the reporting server itself."""
        return len(self.replicas) + 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterSnapshot":
        return cls(
            leader=data.get("leader", ""),
            replicas=[PeerInfo.from_dict(r) for r in data.get("replicas", [])],
        )


@dataclass(frozen=True)
class Credential:
    """Expiry information extracted from a user credential."""

    expires_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Credential":
        expires = data.get("expires_at")
        return cls(expires_at=parse_instant(expires) if expires else None)


@dataclass(frozen=True)
class StoredMessage:
    """The last message stored in a stream for a subject."""

    subject: str
    data: bytes = b""
    published: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoredMessage":
        body = data.get("data", b"")
        if isinstance(body, str):
            body = body.encode()
        elif isinstance(body, int):
            body = str(body).encode()
        return cls(
            subject=data.get("subject", ""),
            data=body,
            published=parse_instant(data["published"]) if "published" in data else datetime.now(timezone.utc),
        )
