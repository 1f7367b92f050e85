"""Content-addressed storage for logos and the built token list."""

from .fleek import FleekStorageClient
from .logos import LogoResolver, fallback_logo_uri, logo_storage_key

__all__ = [
    "FleekStorageClient",
    "LogoResolver",
    "fallback_logo_uri",
    "logo_storage_key",
]
