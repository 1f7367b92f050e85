"""Pydantic data models for the token list builder.

All data structures are immutable (frozen) after creation, so every
pipeline stage hands a new value to the next one instead of editing
what it received.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class ChainFile(BaseModel):
    """A per-chain token file and the chain id encoded in its name."""

    chain_id: int = Field(gt=0)
    path: Path

    model_config = ConfigDict(frozen=True)


class TokenRecord(BaseModel):
    """A single token entry, tagged with the chain it came from.

    Only ``chainId`` and ``address`` are required here; the token list
    schema decides which other fields a published token must carry.
    Unknown fields (``tags``, ``extensions``, ...) are kept as extras.
    Records built from a chain file serialize in the file's key order.
    """

    chainId: int
    address: str
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    logoURI: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow", strict=True)

    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @classmethod
    def from_chain_record(cls, record: dict[str, Any], chain_id: int) -> "TokenRecord":
        """Tag a raw record with its chain id.

        An existing ``chainId`` key keeps its position; otherwise it goes last.
        """
        data = {**record, "chainId": chain_id}
        token = cls.model_validate(data)
        token._key_order = tuple(data)
        return token

    @property
    def has_logo_key(self) -> bool:
        return "logoURI" in self.model_fields_set

    def with_logo(self, logo_uri: str) -> "TokenRecord":
        """Return a copy pointing at a different logo."""
        return self.model_copy(update={"logoURI": logo_uri})

    def without_logo(self) -> "TokenRecord":
        """Return a copy with no logo reference at all."""
        data = self.to_dict()
        data.pop("logoURI", None)
        token = TokenRecord.model_validate(data)
        token._key_order = self._key_order
        return token

    def to_dict(self) -> dict[str, Any]:
        """Serialize only the fields that were actually provided."""
        data = self.model_dump(mode="json", exclude_unset=True)
        if not self._key_order:
            return data
        ordered = {key: data[key] for key in self._key_order if key in data}
        ordered.update((key, value) for key, value in data.items() if key not in ordered)
        return ordered


class Version(BaseModel):
    """Token list version triple."""

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)

    model_config = ConfigDict(frozen=True, extra="allow")

    def bump_minor(self) -> "Version":
        """Next minor version, with patch reset."""
        return self.model_copy(update={"minor": self.minor + 1, "patch": 0})

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class UploadResult(BaseModel):
    """Outcome of a single storage upload."""

    key: str
    hash: str

    model_config = ConfigDict(frozen=True)

    @property
    def ipfs_uri(self) -> str:
        return f"ipfs://{self.hash}"


class BuildResult(BaseModel):
    """Summary of a completed build."""

    output_path: Path
    token_count: int
    chain_ids: list[int] = Field(default_factory=list)
    version: Version
    version_incremented: bool = False
    list_upload: UploadResult | None = None

    model_config = ConfigDict(frozen=True)
