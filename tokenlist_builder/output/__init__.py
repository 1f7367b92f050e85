"""Output module - writing and publishing the token list."""

from .publisher import publish_token_list, serialize_token_list, write_token_list

__all__ = [
    "publish_token_list",
    "serialize_token_list",
    "write_token_list",
]
