"""Logo resolution for token records.

With storage available every local logo is uploaded and replaced by an
``ipfs://`` URI. Without it, repository-relative logo paths are turned
into raw GitHub URLs.
"""

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from ..core.config import DEFAULT_LOGO_FALLBACK_URL
from ..core.models import TokenRecord
from .fleek import FleekStorageClient

logger = logging.getLogger(__name__)

PARENT_DIR_PREFIX = ".."


def logo_storage_key(token: TokenRecord) -> str:
    return f"tokens/{token.chainId}/{token.address}"


def _drop_empty_logo(token: TokenRecord) -> TokenRecord:
    """Null or empty logo references are removed rather than published."""
    return token.without_logo() if token.has_logo_key else token


def fallback_logo_uri(logo_uri: str, fallback_url: str = DEFAULT_LOGO_FALLBACK_URL) -> str:
    """Replace a leading ``..`` with the fallback host; leave anything else alone."""
    if logo_uri.startswith(PARENT_DIR_PREFIX):
        return fallback_url.rstrip("/") + logo_uri[len(PARENT_DIR_PREFIX):]
    return logo_uri


class LogoResolver:
    """Rewrites token logo references for publication."""

    def __init__(
        self,
        assets_dir: Path,
        storage: FleekStorageClient | None = None,
        fallback_url: str = DEFAULT_LOGO_FALLBACK_URL,
    ):
        """
        Initialize the resolver.

        Args:
            assets_dir: Directory logo paths are relative to (the chains directory)
            storage: Storage client; None selects the fallback URL mode
            fallback_url: Base URL substituted for a leading ``..``
        """
        self.assets_dir = assets_dir
        self.storage = storage
        self.fallback_url = fallback_url

    @property
    def uploads_enabled(self) -> bool:
        return self.storage is not None

    def resolve(self, tokens: Sequence[TokenRecord]) -> list[TokenRecord]:
        """Return new token records with publishable logo references."""
        if self.storage is None:
            logger.info("No Fleek credentials found, using GitHub URLs rather than IPFS...")
            return [self._with_fallback(token) for token in tokens]

        logger.info("Uploading token logos to IPFS...")
        return asyncio.run(self._upload_all(self.storage, tokens))

    def _with_fallback(self, token: TokenRecord) -> TokenRecord:
        if not token.logoURI:
            return _drop_empty_logo(token)
        return token.with_logo(fallback_logo_uri(token.logoURI, self.fallback_url))

    async def _upload_all(
        self,
        storage: FleekStorageClient,
        tokens: Sequence[TokenRecord],
    ) -> list[TokenRecord]:
        async with storage:
            return list(
                await asyncio.gather(*(self._upload_logo(storage, token) for token in tokens))
            )

    async def _upload_logo(self, storage: FleekStorageClient, token: TokenRecord) -> TokenRecord:
        if not token.logoURI:
            return _drop_empty_logo(token)

        data = (self.assets_dir / token.logoURI).resolve().read_bytes()
        result = await storage.upload(logo_storage_key(token), data)
        logger.info(f"Uploaded {token.symbol} to {result.hash}")
        return token.with_logo(result.ipfs_uri)
