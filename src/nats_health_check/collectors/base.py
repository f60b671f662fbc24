"""Base collector interface."""

from abc import ABC, abstractmethod

from nats_health_check.models import ClusterSnapshot, VitalsSnapshot


class CollectorError(Exception):
    """Telemetry could not be fetched or understood."""


class BaseCollector(ABC):
    """Abstract base class for telemetry collectors."""

    @abstractmethod
    def vitals(self) -> VitalsSnapshot:
        """Collect server level variables.

        Returns:
            VitalsSnapshot for the server the collector talks to.
        """
        ...

    @abstractmethod
    def cluster(self) -> ClusterSnapshot | None:
        """Collect meta cluster state.

        Returns:
            ClusterSnapshot, or None when the server is not clustered.
        """
        ...
