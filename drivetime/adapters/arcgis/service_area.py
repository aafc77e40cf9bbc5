"""
ArcGIS Service Area Adapter - HTTP client for the solveServiceArea endpoint.
"""

import asyncio
import json
import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import PrivateAttr, ValidationError as PayloadValidationError

from drivetime.adapters.arcgis.payload import (
    ErrorPayload,
    SolveServiceAreaResponse,
    attribute_polygons,
)
from drivetime.core.domain.analysis import WGS84, AnalysisPoint, Credential, ServiceAreaResult
from drivetime.core.domain.errors import EmptyResultError, RemoteServiceError
from drivetime.core.domain.settings import SERVICE_AREA_URL
from drivetime.core.ports.service_area import ServiceAreaClient

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


def _format_break(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_breaks(breakpoints: Sequence[float]) -> str:
    """Comma-join breakpoints at full precision: [5.0, 7.5] -> "5,7.5"."""
    return ",".join(_format_break(b) for b in breakpoints)


class ArcGISServiceAreaClient(ServiceAreaClient):
    """
    Service-area adapter for ArcGIS network analysis services.
    Configured via Pydantic model fields.
    """
    url: str = SERVICE_AREA_URL
    out_wkid: int = WGS84
    timeout: float = 30.0
    max_retries: int = 0
    retry_backoff: float = 0.5
    headers: dict[str, str] = {}

    _client: httpx.AsyncClient | None = PrivateAttr(default=None)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    def build_params(
        self,
        point: AnalysisPoint,
        breakpoints: Sequence[float],
        credential: Credential,
    ) -> dict[str, str]:
        """Form fields for one solve request."""
        return {
            "facilities": point.as_facility(),
            "defaultBreaks": format_breaks(breakpoints),
            "outSpatialReference": json.dumps({"wkid": self.out_wkid}),
            "f": "json",
            "token": credential.token,
        }

    async def solve(
        self,
        point: AnalysisPoint,
        breakpoints: Sequence[float],
        credential: Credential,
    ) -> ServiceAreaResult:
        """Call the service and normalize its polygons."""
        if not breakpoints:
            raise ValueError("At least one breakpoint is required")

        params = self.build_params(point, breakpoints, credential)
        data = await self._post_with_retry(params)

        try:
            response = SolveServiceAreaResponse.model_validate(data)
        except PayloadValidationError as e:
            raise RemoteServiceError(f"Malformed service area response: {e}") from e

        feature_set = response.saPolygons
        if feature_set is None or not feature_set.features:
            logger.error(f"No polygons found in the response: {data}")
            raise EmptyResultError("Service returned no service area polygons")

        wkid = self.out_wkid
        if feature_set.spatialReference is not None:
            wkid = feature_set.spatialReference.wkid or feature_set.spatialReference.latestWkid or wkid

        polygons = attribute_polygons(feature_set.features, breakpoints, wkid)
        return ServiceAreaResult(polygons=polygons)

    async def _post_with_retry(self, params: dict[str, str]) -> dict[str, Any]:
        attempt = 0
        while True:
            try:
                return await self._post(params)
            except RemoteServiceError as e:
                if not e.retryable or attempt >= self.max_retries:
                    raise
                delay = self.retry_backoff * (2 ** attempt)
                attempt += 1
                logger.warning(f"Service area request failed ({e}), retry {attempt}/{self.max_retries} in {delay}s")
                await asyncio.sleep(delay)

    async def _post(self, params: dict[str, str]) -> dict[str, Any]:
        client = await self._get_client()

        try:
            response = await client.post(self.url, data=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise RemoteServiceError(
                f"Service area request returned HTTP {status}",
                code=status,
                retryable=status in RETRYABLE_STATUSES,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Service area request failed: {e}", retryable=True) from e

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteServiceError("Service area response is not valid JSON") from e
        if not isinstance(data, dict):
            raise RemoteServiceError(f"Expected a JSON object, got {type(data).__name__}")

        # ArcGIS reports faults with HTTP 200 and an "error" body
        if data.get("error"):
            try:
                fault = ErrorPayload.model_validate(data["error"])
            except PayloadValidationError:
                fault = ErrorPayload(message=str(data["error"]))
            raise RemoteServiceError(
                f"Service area fault {fault.code}: {fault.message}",
                code=fault.code,
                details=fault.details,
                retryable=fault.code in RETRYABLE_STATUSES,
            )
        return data

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
