"""
Run Domain Models - Transient state of one click-to-render analysis.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum

from drivetime.core.domain.analysis import AnalysisPoint, Credential, ServiceAreaResult

_run_ids = itertools.count(1)


class Phase(str, Enum):
    IDLE = "idle"
    POINT_CAPTURED = "point_captured"
    AWAITING_CREDENTIAL = "awaiting_credential"
    AWAITING_RESULT = "awaiting_result"
    RENDERED = "rendered"
    FAILED = "failed"


TERMINAL_PHASES = frozenset({Phase.RENDERED, Phase.FAILED})


@dataclass
class AnalysisRun:
    """State of a single analysis, owned by the orchestrator while in flight."""

    point: AnalysisPoint
    breakpoints: tuple[float, ...]
    phase: Phase = Phase.IDLE
    credential: Credential | None = None
    result: ServiceAreaResult | None = None
    error: str | None = None
    run_id: int = field(default_factory=lambda: next(_run_ids))

    @property
    def finished(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def summary(self) -> dict:
        """JSON-friendly view of the run (never includes the credential)."""
        return {
            "run_id": self.run_id,
            "phase": self.phase.value,
            "point": self.point.model_dump(),
            "breakpoints": list(self.breakpoints),
            "polygons": len(self.result.polygons) if self.result else 0,
            "error": self.error,
        }
