"""
D365 Authentication Providers

Static bearer token and Azure AD client credentials implementations of IAuthProvider.
"""

import time
from typing import Dict, Any, Optional
from urllib.parse import urlsplit
from azure.identity import ClientSecretCredential
import structlog

from .interface import IAuthProvider, AuthenticationError

logger = structlog.get_logger(__name__)


def resource_scope(metadata_url: str) -> str:
    """Build the AAD scope for the environment that serves ``metadata_url``"""
    parts = urlsplit(metadata_url)
    if not parts.scheme or not parts.netloc:
        raise AuthenticationError(f"Cannot derive resource from metadata URL: {metadata_url}")
    return f"{parts.scheme}://{parts.netloc}/.default"


class StaticTokenProvider(IAuthProvider):
    """Bearer token supplied by the user (flag, environment or prompt)"""

    def __init__(self, token: str, source: str = "argument"):
        if not token:
            raise AuthenticationError("Bearer token is empty")
        self.token = token
        self.source = source

    async def get_token(self) -> str:
        return self.token

    async def refresh_token_if_needed(self) -> Optional[str]:
        # A static token cannot be renewed
        return None

    def get_provider_info(self) -> Dict[str, Any]:
        return {
            "type": "static",
            "source": self.source,
            "token_preview": self.token[:10] + "...",
        }


class AzureClientCredentialsProvider(IAuthProvider):
    """Acquires D365 tokens from Azure AD using a service principal"""

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        metadata_url: str,
    ) -> None:
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.scope = resource_scope(metadata_url)
        self._cached: Optional[Dict[str, Any]] = None

        self.credential = ClientSecretCredential(
            tenant_id=tenant_id,
            client_id=client_id,
            client_secret=client_secret,
        )

        logger.info(
            "Azure client credentials provider initialized",
            tenant_id=tenant_id,
            client_id=client_id,
            scope=self.scope,
        )

    async def get_token(self) -> str:
        """
        Get D365 access token using client credentials flow

        Returns:
            Valid access token for the environment hosting the metadata URL
        """
        if self._cached and self._cached["expires_at"] > time.time() + 60:  # 60 second buffer
            logger.debug("Using cached D365 token", scope=self.scope)
            return str(self._cached["token"])

        try:
            logger.debug("Requesting new D365 token", scope=self.scope)
            token = self.credential.get_token(self.scope)
        except Exception as e:
            logger.error(
                "Failed to acquire D365 token",
                error=str(e),
                tenant_id=self.tenant_id,
                client_id=self.client_id,
            )
            raise AuthenticationError(f"Failed to acquire D365 token: {e}") from e

        self._cached = {"token": token.token, "expires_at": token.expires_on}
        logger.info("D365 token acquired successfully", expires_at=token.expires_on)
        return str(token.token)

    def clear_token_cache(self) -> None:
        """Clear the cached token"""
        self._cached = None

    async def refresh_token_if_needed(self) -> Optional[str]:
        self.clear_token_cache()
        try:
            return await self.get_token()
        except AuthenticationError:
            return None

    def get_provider_info(self) -> Dict[str, Any]:
        return {
            "type": "azure_ad",
            "tenant_id": self.tenant_id,
            "client_id": self.client_id,
            "scope": self.scope,
            "token_cached": self._cached is not None,
        }
