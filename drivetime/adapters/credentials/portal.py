"""
Portal Token Provider - Requests short-lived tokens from a portal.

Calls the portal's sharing/rest/generateToken endpoint with a username and
password. A new token is requested on every fetch.
"""

import logging
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError as PayloadValidationError

from drivetime.adapters.arcgis.payload import ErrorPayload
from drivetime.core.domain.analysis import Credential
from drivetime.core.domain.errors import AuthError
from drivetime.core.ports.credential_provider import CredentialProvider

logger = logging.getLogger(__name__)


class PortalTokenProvider(CredentialProvider):
    """
    Credential provider that signs in to a portal.
    """

    def __init__(
        self,
        username: str | None,
        password: str | None,
        expiration: int = 60,
        referer: str = "drivetime-analysis",
        timeout: float = 30.0,
    ):
        """
        Args:
            username: Portal account
            password: Portal password
            expiration: Requested token lifetime in minutes
            referer: Referer the token is bound to
            timeout: HTTP timeout in seconds
        """
        self.username = username
        self.password = password
        self.expiration = expiration
        self.referer = referer
        self.timeout = timeout
        self.client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout, headers={"Referer": self.referer})
        return self.client

    async def fetch(self, authority_url: str) -> Credential:
        if not self.username or not self.password:
            raise AuthError(f"No portal credentials configured for {authority_url}")

        token_url = f"{authority_url.rstrip('/')}/sharing/rest/generateToken"
        form = {
            "username": self.username,
            "password": self.password,
            "client": "referer",
            "referer": self.referer,
            "expiration": str(self.expiration),
            "f": "json",
        }

        try:
            response = await self._get_client().post(token_url, data=form)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch token: {e}")
            raise AuthError(f"Unable to fetch token from {authority_url}: {e}") from e
        except ValueError as e:
            raise AuthError(f"Token response from {authority_url} is not valid JSON") from e

        if not isinstance(data, dict):
            raise AuthError(f"Unexpected token response from {authority_url}")
        if data.get("error"):
            try:
                fault = ErrorPayload.model_validate(data["error"])
            except PayloadValidationError:
                fault = ErrorPayload(message=str(data["error"]))
            raise AuthError(f"Portal rejected sign-in ({fault.code}): {fault.message}")

        token = data.get("token")
        if not token:
            raise AuthError(f"Portal at {authority_url} returned no token")

        expires_at = None
        if isinstance(data.get("expires"), (int, float)):
            expires_at = datetime.fromtimestamp(data["expires"] / 1000, tz=timezone.utc)

        logger.info(f"Token fetched from {authority_url}, expires {expires_at}")
        return Credential(token=token, authority_url=authority_url, expires_at=expires_at)

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None
