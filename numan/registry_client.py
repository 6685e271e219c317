"""
Registry Client
Async HTTP client pushing package archives to a NuGet registry.

Provides:
- Upload of a single archive (multipart PUT)
- Progress display while the request is in flight
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from .exceptions import InputValidationError, UploadTransportError
from .utils.spinner import Spinner

DEFAULT_REGISTRY_URL = "https://www.nuget.org/api/v2/package/"
DEFAULT_CLIENT_VERSION = "4.1.0"

API_KEY_HEADER = "X-NuGet-ApiKey"
CLIENT_VERSION_HEADER = "X-NuGet-Client-Version"


# =================== Data Classes ===================


@dataclass
class UploadResult:
    """Outcome of an upload request."""
    success: bool
    status_code: int
    body: str = ""
    reason: str = ""


# =================== Registry Client ===================


class RegistryClient:
    """
    Async client for the package registry upload endpoint.

    Every upload is a single HTTP PUT. Non-2xx responses come back as an
    unsuccessful UploadResult; only transport failures raise.
    """

    def __init__(
        self,
        registry_url: str = os.getenv("NUMAN_REGISTRY_URL", DEFAULT_REGISTRY_URL),
        api_key: Optional[str] = None,
        client_version: str = DEFAULT_CLIENT_VERSION,
        timeout: Optional[float] = None,
        show_progress: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the registry client.

        Args:
            registry_url: Package endpoint uploads are sent to
            api_key: Default api key for uploads
            client_version: Value of the client version header
            timeout: Request timeout in seconds, None for no deadline
            show_progress: Render the arrow progress while uploading
            transport: Optional httpx transport (used by tests)
        """
        self.registry_url = registry_url
        self.api_key = api_key
        self.client_version = client_version
        self.timeout = timeout
        self.show_progress = show_progress
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.logger = logging.getLogger(__name__)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={CLIENT_VERSION_HEADER: self.client_version},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RegistryClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    # =================== Publishing ===================

    async def upload(self, file_path: Path, api_key: Optional[str] = None) -> UploadResult:
        """
        Upload a package archive to the registry.

        Args:
            file_path: Path to the archive
            api_key: Api key for this request, defaults to the client key

        Returns:
            UploadResult with the response status and body text

        Raises:
            InputValidationError: If no api key is available
            UploadTransportError: If the request could not be completed
        """
        api_key = api_key or self.api_key
        if not api_key:
            raise InputValidationError("Api key is not defined! Use -k [key]", exit_code=4)

        file_path = Path(file_path)
        client = await self._get_client()
        self.logger.info(f"Uploading {file_path} to {self.registry_url}")

        try:
            with open(file_path, "rb") as f:
                files = {"": (file_path.name, f, "application/octet-stream")}
                headers = {API_KEY_HEADER: api_key}

                if self.show_progress:
                    async with Spinner(str(file_path), suffix=self.registry_url):
                        response = await client.put(self.registry_url, files=files, headers=headers)
                else:
                    response = await client.put(self.registry_url, files=files, headers=headers)

        except httpx.RequestError as e:
            self.logger.error(f"Upload of {file_path} failed: {e!r}")
            raise UploadTransportError(f"Connection failed: {e!r}") from e

        result = UploadResult(
            success=response.is_success,
            status_code=response.status_code,
            body=response.text,
            reason=response.reason_phrase,
        )
        if result.success:
            self.logger.info(f"Upload of {file_path} accepted: {response.status_code}")
        else:
            self.logger.warning(
                f"Upload of {file_path} rejected: {response.status_code}",
                extra={"response_body": result.body[:500]},
            )
        return result
