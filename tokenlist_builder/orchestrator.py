"""Main orchestrator for the token list build.

Runs the pipeline top to bottom: discover and order chain files,
parse and tag their tokens, resolve logos, optionally bump the
version, assemble and validate the list, then write and publish it.
"""

import json
import logging
from typing import Any, Optional

import httpx

from .core.config import BuildConfig, StorageCredentials
from .core.exceptions import InvalidTemplateError, MissingInputError
from .core.models import BuildResult, TokenRecord
from .output.publisher import publish_token_list, write_token_list
from .pipeline.assembler import TokenListValidator, assemble_token_list
from .pipeline.chain_files import collect_tokens, discover_chain_files
from .pipeline.versioning import Clock, VersionStamper, read_version, utc_now
from .storage.fleek import FleekStorageClient
from .storage.logos import LogoResolver

logger = logging.getLogger(__name__)


class TokenListBuilder:
    """Builds the token list artifact from a token list repository."""

    def __init__(
        self,
        config: BuildConfig,
        credentials: Optional[StorageCredentials] = None,
        validator: Optional[TokenListValidator] = None,
        clock: Clock = utc_now,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the builder.

        Args:
            config: Build paths and URLs
            credentials: Storage credentials; uploads are skipped unless configured
            validator: Token list schema validator (default: bundled schema)
            clock: Source of the current time for version stamping
            transport: Optional httpx transport for the storage client
        """
        self.config = config
        self.credentials = credentials or StorageCredentials()
        self.validator = validator or TokenListValidator()
        self.clock = clock
        self._transport = transport

    def _storage(self) -> Optional[FleekStorageClient]:
        if not self.credentials.is_configured:
            return None
        return FleekStorageClient(
            self.credentials,
            base_url=self.config.storage_url,
            transport=self._transport,
        )

    def load_template(self) -> dict[str, Any]:
        """Read the token list template."""
        path = self.config.template
        if not path.is_file():
            raise MissingInputError(str(path), "token list template")

        with open(path, "r", encoding="utf-8") as f:
            try:
                template = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidTemplateError(str(path), str(e)) from e

        if not isinstance(template, dict):
            raise InvalidTemplateError(str(path), "expected a JSON object")
        return template

    def collect(self) -> list[TokenRecord]:
        """Gather tagged tokens from every chain file."""
        paths = discover_chain_files(self.config.chains)
        tokens = collect_tokens(paths)
        logger.debug(f"Collected {len(tokens)} tokens from {len(paths)} chain files")
        return tokens

    def build(self, increment_version: bool = False) -> BuildResult:
        """
        Run the full build.

        Args:
            increment_version: Bump the minor version before assembling

        Returns:
            BuildResult describing the written list

        Raises:
            InputDataError: On malformed input files or schema violations
            MissingInputError: If the chains directory or template is missing
        """
        tokens = self.collect()

        storage = self._storage()
        resolver = LogoResolver(
            self.config.chains,
            storage=storage,
            fallback_url=self.config.logo_fallback_url,
        )
        tokens = resolver.resolve(tokens)

        template = self.load_template()
        if increment_version:
            if not self.config.manifest.is_file():
                raise MissingInputError(str(self.config.manifest), "package manifest")
            stamper = VersionStamper(self.config.template, self.config.manifest, clock=self.clock)
            template = stamper.stamp(template)

        document = assemble_token_list(template, tokens)
        self.validator.validate(document)

        output_path = write_token_list(document, self.config.output)

        list_upload = None
        if storage is not None:
            list_upload = publish_token_list(output_path, storage, self.config.list_storage_key)

        return BuildResult(
            output_path=output_path,
            token_count=len(tokens),
            chain_ids=sorted({token.chainId for token in tokens}),
            version=read_version(template, str(self.config.template)),
            version_incremented=increment_version,
            list_upload=list_upload,
        )
