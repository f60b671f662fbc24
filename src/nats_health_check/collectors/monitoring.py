"""Collector for the NATS HTTP monitoring endpoint."""

import logging
from datetime import timedelta
from typing import Any

import httpx

from nats_health_check.collectors.base import BaseCollector, CollectorError
from nats_health_check.formatting import parse_instant
from nats_health_check.models import ClusterSnapshot, PeerInfo, VitalsSnapshot

logger = logging.getLogger(__name__)


def _nanoseconds(value: int | float | None) -> timedelta:
    return timedelta(microseconds=(value or 0) / 1000)


class MonitoringCollector(BaseCollector):
    """Reads ``/varz`` and ``/jsz`` from a server's monitoring port."""

    def __init__(
        self,
        url: str = "http://localhost:8222",
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize collector.

        Args:
            url: Base URL of the monitoring endpoint.
            timeout: Request timeout in seconds.
            client: Optional preconfigured client, mostly for tests.
        """
        self.url = url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.url}/{path}"
        logger.debug(f"Fetching {url}")
        try:
            response = self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise CollectorError(f"Failed to fetch {url}: {e}") from e
        except ValueError as e:
            raise CollectorError(f"Invalid JSON from {url}: {e}") from e

    def vitals(self) -> VitalsSnapshot:
        varz = self._get("varz")
        jetstream = varz.get("jetstream") or {}

        return VitalsSnapshot(
            name=varz.get("server_name", ""),
            jetstream_enabled=bool(jetstream.get("config")),
            tls_required=varz.get("tls_required", False),
            auth_required=varz.get("auth_required", False),
            cpu=float(varz.get("cpu", 0.0)),
            connections=int(varz.get("connections", 0)),
            memory=int(varz.get("mem", 0)),
            now=parse_instant(varz["now"]),
            start=parse_instant(varz["start"]) if varz.get("start") else None,
        )

    def cluster(self) -> ClusterSnapshot | None:
        jsz = self._get("jsz")
        meta = jsz.get("meta_cluster")
        if not meta:
            return None

        replicas = [
            PeerInfo(
                name=r.get("name", ""),
                current=r.get("current", False),
                offline=r.get("offline", False),
                active=_nanoseconds(r.get("active")),
                lag=int(r.get("lag", 0)),
            )
            for r in meta.get("replicas") or []
        ]
        return ClusterSnapshot(leader=meta.get("leader", ""), replicas=replicas)

    def close(self) -> None:
        self.client.close()
