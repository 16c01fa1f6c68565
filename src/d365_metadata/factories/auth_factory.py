"""
Authentication Provider Factory

Chooses where the bearer token comes from: explicit token, Azure AD service
principal, or an interactive prompt.
"""

from getpass import getpass
from typing import Callable, Optional
import structlog

from ..config import Settings
from ..auth import (
    IAuthProvider,
    AuthenticationError,
    AzureClientCredentialsProvider,
    StaticTokenProvider,
)

logger = structlog.get_logger(__name__)

MAX_PROMPT_ATTEMPTS = 3


def looks_like_jwt(value: str) -> bool:
    """Simple JWT shape check: three dot-separated segments"""
    return bool(value) and len(value.split(".")) == 3


def prompt_for_token(prompt: Callable[[str], str] = getpass) -> str:
    """
    Ask for a bearer token without echoing it.

    Raises:
        AuthenticationError: If no JWT-shaped token is entered
    """
    for _ in range(MAX_PROMPT_ATTEMPTS):
        try:
            value = prompt("Enter your Bearer Token: ").strip()
        except (EOFError, KeyboardInterrupt) as e:
            raise AuthenticationError("No valid Bearer Token entered") from e
        if looks_like_jwt(value):
            return value
        print("Please enter a valid Bearer Token.")
    raise AuthenticationError("No valid Bearer Token entered")


class AuthProviderFactory:
    """Factory for creating authentication providers"""

    @staticmethod
    def create(
        settings: Settings,
        metadata_url: str,
        token: Optional[str] = None,
        prompt: Optional[Callable[[str], str]] = None,
    ) -> IAuthProvider:
        """
        Create auth provider for one fetch.

        Args:
            settings: Application settings
            metadata_url: URL being fetched (scope for Azure AD tokens)
            token: Token given on the command line
            prompt: Input function used when no other source is available

        Returns:
            Configured auth provider instance
        """
        if token:
            logger.debug("Using bearer token from command line")
            return StaticTokenProvider(token, source="argument")

        if settings.dynamics_bearer_token:
            logger.debug("Using bearer token from DYNAMICS_BEARER_TOKEN")
            return StaticTokenProvider(settings.dynamics_bearer_token, source="environment")

        if settings.has_azure_credentials:
            logger.debug("Using Azure AD client credentials")
            return AzureClientCredentialsProvider(
                tenant_id=settings.azure_tenant_id,
                client_id=settings.azure_client_id,
                client_secret=settings.azure_client_secret,
                metadata_url=metadata_url,
            )

        return StaticTokenProvider(prompt_for_token(prompt or getpass), source="prompt")
