"""Core module - data models, configuration, types, and exceptions."""

from .config import BuildConfig, StorageCredentials, load_environment
from .exceptions import (
    ConfigurationError,
    InputDataError,
    InvalidChainFileError,
    InvalidChainFileNameError,
    InvalidTemplateError,
    InvalidTokenError,
    MissingInputError,
    SchemaValidationError,
    StorageError,
    TokenListError,
)
from .models import BuildResult, ChainFile, TokenRecord, UploadResult, Version
from .types import ExitCode

__all__ = [
    # Config
    "BuildConfig",
    "StorageCredentials",
    "load_environment",
    # Models
    "BuildResult",
    "ChainFile",
    "TokenRecord",
    "UploadResult",
    "Version",
    # Types
    "ExitCode",
    # Exceptions
    "TokenListError",
    "InputDataError",
    "InvalidChainFileNameError",
    "InvalidChainFileError",
    "InvalidTemplateError",
    "InvalidTokenError",
    "SchemaValidationError",
    "MissingInputError",
    "ConfigurationError",
    "StorageError",
]
