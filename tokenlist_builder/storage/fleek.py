"""Fleek storage client.

Uploads bytes under a key and returns the IPFS content hash that the
storage service assigned to them.
"""

import asyncio
import logging
import time
from typing import Iterable

import httpx

from ..core.config import DEFAULT_STORAGE_URL, StorageCredentials
from ..core.exceptions import StorageError
from ..core.models import UploadResult

logger = logging.getLogger(__name__)


class FleekStorageClient:
    """Async client for the Fleek storage upload API."""

    HASH_HEADER = "x-ipfs-hash"

    def __init__(
        self,
        credentials: StorageCredentials,
        base_url: str = DEFAULT_STORAGE_URL,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the storage client.

        Args:
            credentials: Fleek storage API key and secret
            base_url: Storage API base URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not credentials.is_configured:
            raise ValueError("Fleek storage credentials are not configured")

        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def bucket(self) -> str:
        return f"{self.credentials.api_key}-bucket"

    async def __aenter__(self) -> "FleekStorageClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "x-api-key": self.credentials.api_key or "",
                "x-api-secret": self.credentials.api_secret or "",
            },
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def upload(self, key: str, data: bytes) -> UploadResult:
        """Upload ``data`` under ``key`` and return its content hash."""
        if self._client is None:
            raise RuntimeError("FleekStorageClient must be used as an async context manager")

        start_time = time.time()
        response = await self._client.put(
            f"/{self.bucket}/{key}",
            content=data,
            headers={"content-type": "application/octet-stream"},
        )
        response.raise_for_status()
        duration_ms = int((time.time() - start_time) * 1000)

        content_hash = response.headers.get(self.HASH_HEADER)
        if not content_hash and response.content:
            body = response.json()
            if isinstance(body, dict):
                content_hash = body.get("hash")
        if not content_hash:
            raise StorageError(key, "upload response has no content hash", response.status_code)

        logger.debug(f"Stored {key} as {content_hash} ({duration_ms}ms)")
        return UploadResult(key=key, hash=content_hash)

    async def upload_many(self, items: Iterable[tuple[str, bytes]]) -> list[UploadResult]:
        """Upload all items concurrently; the first failure fails the batch."""
        return list(await asyncio.gather(*(self.upload(key, data) for key, data in items)))
