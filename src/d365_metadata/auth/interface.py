"""
Authentication Provider Interface

Defines contract for bearer token providers (static token, Azure AD service principal)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class IAuthProvider(ABC):
    """Interface for authentication providers"""

    @abstractmethod
    async def get_token(self) -> str:
        """
        Get bearer token for the D365 metadata endpoint.

        Returns:
            Bearer token string (without the "Bearer " prefix)

        Raises:
            AuthenticationError: If no token can be obtained
        """
        pass

    @abstractmethod
    async def refresh_token_if_needed(self) -> Optional[str]:
        """
        Obtain a fresh token after the server rejected the current one.

        Returns:
            New token if one could be acquired, None if the provider cannot refresh
        """
        pass

    @abstractmethod
    def get_provider_info(self) -> Dict[str, Any]:
        """
        Get information about the auth provider.

        Returns:
            Provider metadata (type, settings, etc.)
        """
        pass


class AuthenticationError(Exception):
    """Authentication related errors"""
    pass
