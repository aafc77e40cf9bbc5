"""
Static Token Provider - Hands out a token taken from configuration.
"""

from drivetime.core.domain.analysis import Credential
from drivetime.core.domain.errors import AuthError
from drivetime.core.ports.credential_provider import CredentialProvider


class StaticTokenProvider(CredentialProvider):
    """
    Credential provider backed by a pre-issued API key or token.
    """

    def __init__(self, token: str | None):
        self.token = token

    async def fetch(self, authority_url: str) -> Credential:
        if not self.token:
            raise AuthError(f"No token configured for {authority_url}")
        return Credential(token=self.token, authority_url=authority_url)
