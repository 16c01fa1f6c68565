"""
D365 OData Metadata Client

Downloads the $metadata document with a bearer token and refreshes the token
once when the server answers 401.
"""

from typing import Optional, Dict, Any
import httpx
import structlog

from ..auth import IAuthProvider
from .interface import IMetadataClient, MetadataFetchError

logger = structlog.get_logger(__name__)


class D365MetadataClient(IMetadataClient):
    """HTTP client for D365 OData $metadata with automatic token refresh"""

    def __init__(
        self,
        auth_provider: IAuthProvider,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth_provider = auth_provider
        self.timeout = timeout
        self._transport = transport
        self._token: Optional[str] = None

    async def _current_token(self) -> str:
        if self._token is None:
            self._token = await self.auth_provider.get_token()
        return self._token

    async def refresh_token_if_needed(self) -> bool:
        """
        Refresh the access token using the auth provider.

        Returns:
            True if token was refreshed, False if the provider could not renew it
        """
        new_token = await self.auth_provider.refresh_token_if_needed()
        if new_token:
            self._token = new_token
            logger.info("Token refreshed successfully")
            return True
        return False

    async def make_authenticated_request(
        self, method: str, url: str, **kwargs
    ) -> httpx.Response:
        """
        Make an HTTP request with automatic token refresh on 401 errors.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional arguments for httpx request

        Returns:
            HTTP response

        Raises:
            httpx.HTTPStatusError: If request fails after token refresh attempt
        """
        headers = dict(kwargs.pop('headers', {}))
        headers['Authorization'] = f"Bearer {await self._current_token()}"

        max_retries = 2
        for attempt in range(max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    response = await client.request(method, url, headers=headers, **kwargs)
                    response.raise_for_status()
                    return response

            except httpx.HTTPStatusError as e:
                if e.response.status_code == 401 and attempt < max_retries - 1:
                    logger.warning("Received 401 Unauthorized, attempting token refresh",
                                   attempt=attempt + 1, max_retries=max_retries)

                    if await self.refresh_token_if_needed():
                        headers['Authorization'] = f"Bearer {self._token}"
                        logger.info("Retrying request with refreshed token")
                        continue
                    logger.debug("Token provider cannot refresh, giving up")

                logger.error("HTTP request failed",
                             method=method, url=url, status_code=e.response.status_code)
                raise

        # Unreachable: the final attempt either returns or raises
        raise RuntimeError("request loop exited without a response")

    async def fetch_metadata(self, metadata_url: str) -> str:
        """
        Get D365 OData metadata XML.

        Returns:
            Raw XML metadata from the D365 OData service
        """
        logger.info("Fetching D365 metadata", url=metadata_url)

        try:
            response = await self.make_authenticated_request(
                "GET", metadata_url,
                headers={"Accept": "application/xml"},
            )
        except httpx.HTTPStatusError as e:
            logger.error(
                "D365 metadata fetch failed",
                status_code=e.response.status_code,
                response_text=e.response.text,
            )
            raise MetadataFetchError(
                f"Metadata request failed with status {e.response.status_code}",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            logger.error("D365 metadata fetch error", error=str(e))
            raise MetadataFetchError(f"Metadata request failed: {e}") from e

        metadata_xml = response.text
        logger.info("D365 metadata retrieved", size_bytes=len(metadata_xml))
        return metadata_xml

    def get_client_info(self) -> Dict[str, Any]:
        """Get client implementation information"""
        return {
            "type": "odata_metadata_client",
            "timeout": self.timeout,
            "auth": self.auth_provider.get_provider_info(),
        }
