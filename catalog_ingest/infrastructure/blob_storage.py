"""Durable object storage client.

This module defines the ObjectStore interface used by the ingest pipeline
and its Vercel Blob implementation over the shared HTTP client.

Objects are stored under caller-chosen keys without random suffixes, so a
key always maps to the same public URL (``<public_base_url>/<key>``). A
second upload to an existing key is rejected by the store with an
"already exists" error, surfaced here as BlobAlreadyExistsError.
"""

from abc import ABC, abstractmethod
from urllib.parse import quote

import httpx

from catalog_ingest.core.exceptions import (
    BlobAlreadyExistsError,
    ConfigNotFoundError,
    StorageError,
)
from catalog_ingest.core.logging import get_logger
from catalog_ingest.infrastructure.http_client import HTTPClient

logger = get_logger(__name__)


class ObjectStore(ABC):
    """Abstract durable object store."""

    @abstractmethod
    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        allow_overwrite: bool = False,
    ) -> str:
        """Store bytes under a key.

        Args:
            key: Destination key
            data: Object content
            content_type: MIME type served with the object
            allow_overwrite: Replace an existing object instead of failing

        Returns:
            Public URL of the stored object

        Raises:
            BlobAlreadyExistsError: If the key exists and overwrite is not allowed
            StorageError: For any other failure
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Public URL that a key is served from."""


class BlobStorageClient(ObjectStore):
    """Vercel Blob REST client.

    Example:
        >>> store = BlobStorageClient(http_client, token="vercel_blob_rw_...")
        >>> url = await store.put("videos/a/b.mp4", data, "video/mp4")
    """

    def __init__(
        self,
        http_client: HTTPClient,
        token: str,
        api_url: str = "https://blob.vercel-storage.com",
        public_base_url: str = "",
        api_version: str = "7",
    ) -> None:
        """Initialize BlobStorageClient.

        Args:
            http_client: Shared HTTP client
            token: Read/write token
            api_url: Blob API endpoint
            public_base_url: Base URL objects are publicly served from
            api_version: Value of the x-api-version header

        Raises:
            ConfigNotFoundError: If the token is empty
        """
        if not token:
            raise ConfigNotFoundError("blob_read_write_token")

        self.http_client = http_client
        self._token = token
        self.api_url = api_url.rstrip("/")
        self.public_base_url = public_base_url.rstrip("/")
        self.api_version = api_version

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{quote(key, safe='/')}"

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        allow_overwrite: bool = False,
    ) -> str:
        headers = {
            "authorization": f"Bearer {self._token}",
            "x-api-version": self.api_version,
            "x-content-type": content_type,
            "x-add-random-suffix": "0",
        }
        if allow_overwrite:
            headers["x-allow-overwrite"] = "1"

        endpoint = f"{self.api_url}/"
        try:
            response = await self.http_client.put(
                endpoint,
                params={"pathname": key},
                content=data,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise StorageError(
                f"Upload request failed: {e}", key=key, endpoint=endpoint
            ) from e

        if response.is_success:
            url = _stored_url(response) or self.public_url(key)
            logger.debug("Blob stored", key=key, size=len(data), url=url)
            return url

        message = _error_message(response)
        if response.status_code == 409 or "already exists" in message.lower():
            raise BlobAlreadyExistsError(key=key, status_code=response.status_code)

        raise StorageError(
            f"Upload failed with status {response.status_code}: {message}",
            key=key,
            status_code=response.status_code,
            endpoint=endpoint,
            response_body=response.text,
        )


def _stored_url(response: httpx.Response) -> str | None:
    """URL reported by a successful upload, if the body carries one."""
    try:
        payload = response.json()
    except ValueError:
        logger.warning(
            "Blob upload response is not JSON",
            status_code=response.status_code,
            body=response.text[:200],
        )
        return None
    if not isinstance(payload, dict):
        return None
    url = payload.get("url")
    return url if isinstance(url, str) and url else None


def _error_message(response: httpx.Response) -> str:
    """Extract the error message from a blob API error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return str(error.get("message") or error.get("code") or "")
    return response.text


__all__ = [
    "BlobStorageClient",
    "ObjectStore",
]
