from pydantic import BaseModel, Field, model_validator

from drivetime.core.domain.analysis import WGS84

SERVICE_AREA_URL = (
    "https://route.arcgis.com/arcgis/rest/services/World/ServiceAreas/"
    "NAServer/ServiceArea_World/solveServiceArea"
)


class SystemSettings(BaseModel):
    """
    Global system configuration settings.
    """
    # Credential authority
    portal_url: str = Field(default="https://www.arcgis.com", description="Portal that issues tokens")
    api_token: str | None = Field(default=None, description="Static token; skips the portal when set")
    portal_username: str | None = Field(default=None, description="Portal username for generateToken")
    portal_password: str | None = Field(default=None, description="Portal password for generateToken")
    token_expiration: int = Field(default=60, gt=0, description="Requested token lifetime in minutes")

    # Remote analysis service
    service_area_url: str = Field(default=SERVICE_AREA_URL, description="solveServiceArea endpoint")
    out_wkid: int = Field(default=WGS84, description="Spatial reference of returned polygons")
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    max_retries: int = Field(default=0, ge=0, description="Retries for transient service failures")
    retry_backoff: float = Field(default=0.5, ge=0, description="Base backoff in seconds, doubled per retry")

    # Breakpoints
    default_breakpoints: list[float] = Field(default_factory=lambda: [5, 10, 15], min_length=1)
    min_breakpoint: float = Field(default=1, gt=0)
    max_breakpoint: float = Field(default=15, gt=0)

    # Runs
    supersede_in_flight: bool = Field(default=False, description="Newest click cancels older in-flight runs")

    @model_validator(mode="after")
    def _check_breakpoint_bounds(self) -> "SystemSettings":
        if self.min_breakpoint > self.max_breakpoint:
            raise ValueError("min_breakpoint must not exceed max_breakpoint")
        for value in self.default_breakpoints:
            if not self.min_breakpoint <= value <= self.max_breakpoint:
                raise ValueError(
                    f"default breakpoint {value} outside [{self.min_breakpoint}, {self.max_breakpoint}]"
                )
        return self

    def get_token_url(self) -> str:
        """Get the portal's generateToken endpoint."""
        return f"{self.portal_url.rstrip('/')}/sharing/rest/generateToken"
