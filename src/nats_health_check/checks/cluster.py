"""Meta cluster (RAFT) peer health check."""

import logging

from nats_health_check.checks.base import BaseCheck
from nats_health_check.config import ClusterThresholds
from nats_health_check.formatting import short_duration
from nats_health_check.models import ClusterSnapshot
from nats_health_check.result import PerfDatum, Result

logger = logging.getLogger(__name__)


class ClusterCheck(BaseCheck):
    """Checks leadership, peer count and the state of every replica.

    Missing cluster information and a missing leader are reported as
    critical findings rather than errors.
    """

    name = "cluster"
    thresholds: ClusterThresholds

    def check(self, result: Result, snapshot: ClusterSnapshot | None) -> None:
        if snapshot is None:
            result.add_critical("no cluster information")
            return

        if not snapshot.leader:
            result.add_critical("No leader")
            return

        t = self.thresholds
        criticals_before = len(result.criticals)

        peers = snapshot.peer_count
        if t.expected_peers and peers != t.expected_peers:
            result.add_critical(f"{peers} peers of expected {t.expected_peers}")

        offline = not_current = inactive = lagged = 0
        for peer in snapshot.replicas:
            if peer.offline:
                offline += 1
            if not peer.current:
                not_current += 1
            if peer.active > t.seen_critical:
                inactive += 1
            if peer.lag > t.lag_critical:
                lagged += 1
            logger.debug(
                f"Peer {peer.name}: current={peer.current} offline={peer.offline} "
                f"active={peer.active} lag={peer.lag}"
            )

        result.add_perf_data(PerfDatum("peers", peers, warn=t.expected_peers, crit=t.expected_peers))
        result.add_perf_data(PerfDatum("peer_offline", offline))
        result.add_perf_data(PerfDatum("peer_not_current", not_current))
        result.add_perf_data(PerfDatum("peer_inactive", inactive))
        result.add_perf_data(PerfDatum("peer_lagged", lagged))

        if not_current > 0:
            result.add_critical(f"{not_current} not current")
        if inactive > 0:
            result.add_critical(f"{inactive} inactive more than {short_duration(t.seen_critical)}")
        if offline > 0:
            result.add_critical(f"{offline} offline")
        if lagged > 0:
            result.add_critical(f"{lagged} lagged more than {t.lag_critical} ops")

        if len(result.criticals) == criticals_before:
            result.add_ok(f"{peers} peers led by {snapshot.leader}")
