"""Pipeline stages that turn chain files into a token list document."""

from .assembler import TokenListValidator, assemble_token_list
from .chain_files import (
    collect_tokens,
    discover_chain_files,
    load_chain_tokens,
    order_chain_files,
    parse_chain_id,
)
from .versioning import VersionStamper, increment_version, read_version

__all__ = [
    "TokenListValidator",
    "assemble_token_list",
    "collect_tokens",
    "discover_chain_files",
    "load_chain_tokens",
    "order_chain_files",
    "parse_chain_id",
    "VersionStamper",
    "increment_version",
    "read_version",
]
