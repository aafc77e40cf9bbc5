"""
ServiceAreaClient Port - Interface for the remote reachability analysis.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from drivetime.core.domain.analysis import AnalysisPoint, Credential, ServiceAreaResult


class ServiceAreaClient(BaseModel, ABC):
    """
    Abstract interface for service-area solvers.
    Also serves as a Pydantic Model for configuration validation.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    @abstractmethod
    async def solve(
        self,
        point: AnalysisPoint,
        breakpoints: Sequence[float],
        credential: Credential,
    ) -> ServiceAreaResult:
        """
        Compute reachability polygons around a point.

        Args:
            point: Facility location
            breakpoints: Travel-time budgets in minutes, in display order
            credential: Bearer credential for the service

        Returns:
            ServiceAreaResult with one polygon per breakpoint

        Raises:
            EmptyResultError: Response holds no polygons
            RemoteServiceError: Transport, status or payload failure
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
