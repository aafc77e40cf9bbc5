"""
CredentialProvider Port - Interface for obtaining bearer credentials.

Implementations can hand out a configured token or request one from a
portal. Credentials are fetched fresh for every run; providers must not be
relied upon to cache.
"""

from abc import ABC, abstractmethod

from drivetime.core.domain.analysis import Credential


class CredentialProvider(ABC):
    """
    Abstract interface for credential lookup.

    Implementations:
    - StaticTokenProvider: Token from configuration
    - PortalTokenProvider: Token from the portal's generateToken endpoint
    """

    @abstractmethod
    async def fetch(self, authority_url: str) -> Credential:
        """
        Obtain a credential issued by authority_url.

        Args:
            authority_url: Portal the credential belongs to

        Returns:
            Credential with a non-empty token

        Raises:
            AuthError: If no credential is available or the authority rejects
        """
        ...
