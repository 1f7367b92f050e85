"""Writing the built token list and mirroring it to storage."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from ..core.models import UploadResult
from ..storage.fleek import FleekStorageClient

logger = logging.getLogger(__name__)


def serialize_token_list(document: dict[str, Any]) -> str:
    """Two-space indented JSON, key order as constructed."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_token_list(document: dict[str, Any], path: Path) -> Path:
    """Write the token list, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_token_list(document), encoding="utf-8")
    logger.debug(f"Wrote token list to {path}")
    return path


async def _upload_file(storage: FleekStorageClient, path: Path, key: str) -> UploadResult:
    async with storage:
        return await storage.upload(key, path.read_bytes())


def publish_token_list(path: Path, storage: FleekStorageClient, key: str) -> UploadResult:
    """
    Upload a written token list file.

    Args:
        path: The token list file produced by ``write_token_list``
        storage: Storage client to upload with
        key: Storage key for the list

    Returns:
        UploadResult carrying the list's content hash
    """
    logger.info("Uploading token list to IPFS...")
    result = asyncio.run(_upload_file(storage, path, key))
    logger.info(f"Uploaded list to {result.hash}")
    return result
