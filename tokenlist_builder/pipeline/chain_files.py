"""Discovery, ordering and parsing of per-chain token files.

Each file under the chains directory is named ``<chainId>.json`` and
holds a JSON array of token records for that chain.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from ..core.exceptions import (
    InvalidChainFileError,
    InvalidChainFileNameError,
    InvalidTokenError,
    MissingInputError,
)
from ..core.models import ChainFile, TokenRecord

logger = logging.getLogger(__name__)

CHAIN_FILENAME_PATTERN = re.compile(r"^(\d+)\.json$")


def discover_chain_files(chains_dir: Path) -> list[Path]:
    """Return every candidate ``*.json`` file directly inside ``chains_dir``."""
    if not chains_dir.is_dir():
        raise MissingInputError(str(chains_dir), "chains directory")
    return list(chains_dir.glob("*.json"))


def parse_chain_id(path: Path) -> int:
    """Extract the chain id encoded in a chain file name."""
    match = CHAIN_FILENAME_PATTERN.match(path.name)
    if match is None:
        raise InvalidChainFileNameError(str(path))

    chain_id = int(match.group(1))
    if chain_id <= 0:
        raise InvalidChainFileNameError(str(path))
    return chain_id


def order_chain_files(paths: Iterable[Path]) -> list[ChainFile]:
    """
    Validate file names and sort them by numeric chain id.

    Every name is checked before anything is returned, so a single bad
    file name rejects the whole set.
    """
    chain_files = [ChainFile(chain_id=parse_chain_id(p), path=p) for p in paths]
    return sorted(chain_files, key=lambda cf: cf.chain_id)


def _tag_record(chain_file: ChainFile, record: Any) -> TokenRecord:
    if not isinstance(record, dict):
        raise InvalidTokenError(str(chain_file.path), record, "not an object")
    if "address" not in record:
        raise InvalidTokenError(str(chain_file.path), record, "no address")

    try:
        return TokenRecord.from_chain_record(record, chain_file.chain_id)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidTokenError(str(chain_file.path), record, problems) from e


def load_chain_tokens(chain_file: ChainFile) -> list[TokenRecord]:
    """Parse one chain file and tag each record with its chain id."""
    raw = chain_file.path.read_bytes()
    try:
        parsed = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidChainFileError(str(chain_file.path), str(e)) from e

    if not isinstance(parsed, list):
        raise InvalidChainFileError(str(chain_file.path), "expected a JSON array")

    tokens = [_tag_record(chain_file, record) for record in parsed]
    logger.debug(f"Loaded {len(tokens)} tokens for chain {chain_file.chain_id}")
    return tokens


def collect_tokens(paths: Iterable[Path]) -> list[TokenRecord]:
    """Aggregate tagged tokens from all chain files in chain id order."""
    tokens: list[TokenRecord] = []
    for chain_file in order_chain_files(paths):
        tokens.extend(load_chain_tokens(chain_file))
    return tokens
