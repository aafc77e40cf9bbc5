import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from drivetime.adapters.arcgis.service_area import ArcGISServiceAreaClient
from drivetime.adapters.config.settings_loader import load_settings
from drivetime.adapters.credentials.portal import PortalTokenProvider
from drivetime.adapters.credentials.static import StaticTokenProvider
from drivetime.adapters.map.api_surface import ApiMapSurface
from drivetime.core.domain.analysis import AnalysisPoint
from drivetime.core.domain.breakpoints import BreakpointSet
from drivetime.core.domain.errors import ValidationError
from drivetime.core.domain.settings import SystemSettings
from drivetime.core.ports.credential_provider import CredentialProvider
from drivetime.core.services.orchestrator import AnalysisOrchestrator
from drivetime.core.services.overlay_store import OverlayStore

# Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class BreakpointUpdate(BaseModel):
    value: float


class ClickRequest(BaseModel):
    longitude: float = Field(ge=-180, le=180)
    latitude: float = Field(ge=-90, le=90)


def build_credential_provider(settings: SystemSettings) -> CredentialProvider:
    """A configured token wins; otherwise sign in to the portal."""
    if settings.api_token:
        return StaticTokenProvider(settings.api_token)
    if settings.portal_username:
        return PortalTokenProvider(
            username=settings.portal_username,
            password=settings.portal_password,
            expiration=settings.token_expiration,
            timeout=settings.request_timeout,
        )
    logger.warning("No token or portal account configured, analyses will fail with AuthError")
    return StaticTokenProvider(None)


def build_orchestrator(settings: SystemSettings) -> AnalysisOrchestrator:
    client = ArcGISServiceAreaClient(
        url=settings.service_area_url,
        out_wkid=settings.out_wkid,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        retry_backoff=settings.retry_backoff,
    )
    return AnalysisOrchestrator(
        breakpoints=BreakpointSet(
            settings.default_breakpoints,
            minimum=settings.min_breakpoint,
            maximum=settings.max_breakpoint,
        ),
        credentials=build_credential_provider(settings),
        client=client,
        overlay=OverlayStore(),
        authority_url=settings.portal_url,
        supersede_in_flight=settings.supersede_in_flight,
    )


def create_app(
    settings: SystemSettings | None = None,
    orchestrator: AnalysisOrchestrator | None = None,
    surface: ApiMapSurface | None = None,
) -> FastAPI:
    """
    Wire the orchestrator to an API map surface and expose its controls.
    """
    if orchestrator is None:
        orchestrator = build_orchestrator(settings or load_settings())
    surface = surface or ApiMapSurface()
    orchestrator.attach(surface)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await orchestrator.client.close()
        if isinstance(orchestrator.credentials, PortalTokenProvider):
            await orchestrator.credentials.close()

    app = FastAPI(title="Drive Time Analysis", lifespan=lifespan)
    app.state.orchestrator = orchestrator
    app.state.surface = surface

    @app.get("/health")
    def health_check():
        return {"status": "ok", "version": "0.1.0"}

    @app.get("/breakpoints")
    def get_breakpoints(request: Request):
        return {"breakpoints": request.app.state.orchestrator.breakpoints.get()}

    @app.put("/breakpoints/{index}")
    def update_breakpoint(index: int, update: BreakpointUpdate, request: Request):
        try:
            values = request.app.state.orchestrator.update_breakpoint(index, update.value)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return {"breakpoints": values}

    @app.post("/analysis/start")
    def start_analysis(request: Request):
        request.app.state.orchestrator.start_analysis()
        return {"listening": True}

    @app.post("/map/click")
    async def map_click(click: ClickRequest, request: Request):
        """
        Deliver a map click. Analysis failures are reported in the body.
        """
        if not request.app.state.orchestrator.listening:
            raise HTTPException(status_code=409, detail="Start analysis before clicking the map")
        point = AnalysisPoint(longitude=click.longitude, latitude=click.latitude)
        runs = await request.app.state.surface.click(point)
        return {"runs": [run.summary() for run in runs]}

    @app.delete("/results")
    def clear_results(request: Request):
        request.app.state.orchestrator.clear_results()
        return {"cleared": True}

    @app.get("/overlay")
    def get_overlay(request: Request):
        try:
            return request.app.state.surface.to_geojson()
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))

    @app.get("/status")
    def get_status(request: Request):
        orch = request.app.state.orchestrator
        return {
            "loading": orch.loading,
            "in_flight": orch.in_flight,
            "listening": orch.listening,
            "last_error": orch.last_error,
        }

    return app


app = create_app()
