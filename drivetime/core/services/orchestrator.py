"""
Analysis Orchestrator - Turns a map click into rendered reachability polygons.

Each click starts an independent run:
1. Capture the point, snapshot the breakpoints and place a marker
2. Fetch a credential from the authority
3. Ask the service-area client for polygons
4. Render the polygons in layering order

Runs are not serialized. Overlapping runs all complete and append their own
graphics, unless supersede mode is on, in which case a new click cancels any
run still waiting on I/O.
"""

import asyncio
import logging
from collections.abc import Callable

from drivetime.core.domain.analysis import AnalysisPoint
from drivetime.core.domain.breakpoints import BreakpointSet
from drivetime.core.domain.errors import AnalysisError, RunSupersededError
from drivetime.core.domain.run import AnalysisRun, Phase
from drivetime.core.ports.credential_provider import CredentialProvider
from drivetime.core.ports.map_surface import MapSurface
from drivetime.core.ports.service_area import ServiceAreaClient
from drivetime.core.services.overlay_store import OverlayStore
from drivetime.core.services.rendering import RenderingPolicy

logger = logging.getLogger(__name__)


class AnalysisOrchestrator:
    """
    Core service owning the click-to-render state machine.
    """

    def __init__(
        self,
        breakpoints: BreakpointSet,
        credentials: CredentialProvider,
        client: ServiceAreaClient,
        overlay: OverlayStore,
        authority_url: str,
        renderer: RenderingPolicy | None = None,
        supersede_in_flight: bool = False,
        notify: Callable[[str], None] | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            breakpoints: Editable travel-time budgets
            credentials: Port to obtain bearer credentials
            client: Port to run the service-area analysis
            overlay: Layer that receives markers and polygons
            authority_url: Portal the credentials are requested from
            renderer: Rendering policy (default palette when omitted)
            supersede_in_flight: Cancel older in-flight runs on a new click
            notify: Called with a message for every failed run
        """
        self.breakpoints = breakpoints
        self.credentials = credentials
        self.client = client
        self.overlay = overlay
        self.authority_url = authority_url
        self.renderer = renderer or RenderingPolicy()
        self.supersede_in_flight = supersede_in_flight
        self.notify = notify

        self.last_error: str | None = None
        self._in_flight: dict[int, tuple[AnalysisRun, asyncio.Task]] = {}
        self._surface: MapSurface | None = None
        self._listening = False

    @property
    def loading(self) -> bool:
        """True while any run is waiting on a credential or a result."""
        return bool(self._in_flight)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    @property
    def listening(self) -> bool:
        return self._listening

    def attach(self, surface: MapSurface) -> None:
        """Host the overlay layer on a map surface."""
        surface.add_layer(self.overlay)
        self._surface = surface
        logger.info("Map view attached and graphics layer added.")

    def start_analysis(self) -> None:
        """Subscribe to map clicks. Repeated calls do not add listeners."""
        if self._surface is None:
            raise RuntimeError("No map surface attached")
        if self._listening:
            return
        self._surface.on_click(self.handle_click)
        self._listening = True
        logger.info("Map click listener activated.")

    def update_breakpoint(self, index: int, value: float) -> list[float]:
        """Edit one breakpoint. Raises ValidationError without side effects."""
        self.breakpoints.set(index, value)
        return self.breakpoints.get()

    def clear_results(self) -> None:
        self.overlay.clear()

    async def handle_click(self, point: AnalysisPoint) -> AnalysisRun:
        """
        Run one analysis for a clicked point.

        Failures are reported on the run and through notify; only unexpected
        exceptions propagate. Cancelling the caller does not cancel the run.

        Args:
            point: Clicked location

        Returns:
            The finished run, in phase RENDERED or FAILED
        """
        logger.info(f"Map clicked at: {point.as_facility()}")
        if self.supersede_in_flight:
            self._supersede_older()

        run = AnalysisRun(point=point, breakpoints=self.breakpoints.snapshot())
        run.phase = Phase.POINT_CAPTURED
        self.renderer.render_marker(point, self.overlay)

        task = asyncio.create_task(self._execute(run))
        self._in_flight[run.run_id] = (run, task)
        # Registered before shield() so bookkeeping is done when we resume
        task.add_done_callback(lambda t, run=run: self._finish(run, t))

        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
        return run

    async def _execute(self, run: AnalysisRun) -> None:
        try:
            run.phase = Phase.AWAITING_CREDENTIAL
            run.credential = await self.credentials.fetch(self.authority_url)

            run.phase = Phase.AWAITING_RESULT
            logger.info(f"Starting service area analysis for run {run.run_id} with breaks {list(run.breakpoints)}")
            run.result = await self.client.solve(run.point, run.breakpoints, run.credential)

            self.renderer.render_result(run.result, self.overlay)
            run.phase = Phase.RENDERED
            logger.info(f"Run {run.run_id} rendered {len(run.result.polygons)} polygons")
        except AnalysisError as e:
            self._fail(run, e)
        except asyncio.CancelledError:
            self._fail(run, RunSupersededError("Superseded by a newer click"))
            raise
        except Exception as e:
            logger.exception(f"Run {run.run_id} crashed")
            self._fail(run, e)
            raise
        finally:
            run.credential = None

    def _fail(self, run: AnalysisRun, error: Exception) -> None:
        run.phase = Phase.FAILED
        run.error = f"{type(error).__name__}: {error}"
        self.last_error = run.error
        logger.error(f"Service area analysis failed for run {run.run_id}: {run.error}")
        if self.notify is not None:
            self.notify(run.error)

    def _finish(self, run: AnalysisRun, task: asyncio.Task) -> None:
        self._in_flight.pop(run.run_id, None)
        if not run.finished:
            # Cancelled before the coroutine got to run
            self._fail(run, RunSupersededError("Superseded before it started"))

    def _supersede_older(self) -> None:
        for run, task in list(self._in_flight.values()):
            if not task.done():
                logger.info(f"Cancelling run {run.run_id} in phase {run.phase.value}")
                task.cancel()
