"""Configuration for storage credentials and build paths.

Credentials come from environment variables (or a .env file); build
paths default to the token list repository layout and can be
overridden with a ``tokenlist.yaml`` file at the project root.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

CONFIG_FILENAME = "tokenlist.yaml"

DEFAULT_LOGO_FALLBACK_URL = "https://github.com/tallycash/token-list/raw/main"
DEFAULT_STORAGE_URL = "https://storage-api.fleek.co"


@dataclass(frozen=True)
class StorageCredentials:
    """Fleek storage credentials. Uploads happen only when both are set."""

    api_key: Optional[str] = None
    api_secret: Optional[str] = None

    @classmethod
    def from_env(cls) -> "StorageCredentials":
        """Load credentials from environment variables."""
        return cls(
            api_key=os.getenv("FLEEK_STORAGE_API_KEY"),
            api_secret=os.getenv("FLEEK_STORAGE_API_SECRET"),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and bool(self.api_secret)


@dataclass(frozen=True)
class BuildConfig:
    """Locations of the build inputs and outputs.

    Relative paths are resolved against ``root``.
    """

    root: Path
    chains_dir: Path = Path("chains")
    template_path: Path = Path("base.tokenlist.json")
    manifest_path: Path = Path("package.json")
    output_path: Path = Path("build/tallycash.tokenlist.json")
    logo_fallback_url: str = DEFAULT_LOGO_FALLBACK_URL
    storage_url: str = DEFAULT_STORAGE_URL

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root."""
        return path if path.is_absolute() else self.root / path

    @property
    def chains(self) -> Path:
        return self.resolve(self.chains_dir)

    @property
    def template(self) -> Path:
        return self.resolve(self.template_path)

    @property
    def manifest(self) -> Path:
        return self.resolve(self.manifest_path)

    @property
    def output(self) -> Path:
        return self.resolve(self.output_path)

    @property
    def list_storage_key(self) -> str:
        """Storage key used when mirroring the built list."""
        return self.output_path.name

    @classmethod
    def from_mapping(cls, root: Path, values: dict[str, Any]) -> "BuildConfig":
        """Build a config from a mapping of overrides."""
        known = {f.name: f for f in fields(cls) if f.name != "root"}
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            if key not in known:
                raise ConfigurationError(key, "unknown setting")
            if not isinstance(value, str):
                raise ConfigurationError(key, f"expected a string, got {value!r}")
            kwargs[key] = Path(value) if key.endswith(("_dir", "_path")) else value
        return cls(root=root, **kwargs)

    @classmethod
    def load(cls, root: Optional[Path] = None) -> "BuildConfig":
        """
        Load build configuration for a project directory.

        Args:
            root: Project root. Defaults to the current working directory.

        Returns:
            BuildConfig with any ``tokenlist.yaml`` overrides applied
        """
        root = Path(root) if root is not None else Path.cwd()
        config_file = root / CONFIG_FILENAME
        if not config_file.exists():
            return cls(root=root)

        with open(config_file, "r", encoding="utf-8") as f:
            try:
                values = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(CONFIG_FILENAME, str(e)) from e

        if not isinstance(values, dict):
            raise ConfigurationError(CONFIG_FILENAME, "expected a mapping of settings")

        return cls.from_mapping(root, values)


def load_environment(root: Optional[Path] = None) -> StorageCredentials:
    """Load a project .env file, if any, then read storage credentials."""
    env_path = (Path(root) if root is not None else Path.cwd()) / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    return StorageCredentials.from_env()
