"""Custom exceptions for the token list builder."""

import json
from typing import Any

from .types import ExitCode


class TokenListError(Exception):
    """Base exception for all token list builder errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputDataError(TokenListError):
    """Raised when input files or the assembled list are malformed."""

    exit_code = ExitCode.DATA_ERROR


class InvalidChainFileNameError(InputDataError):
    """Raised when a chain file name does not encode a positive chain id."""

    def __init__(self, path: str):
        super().__init__(f"Invalid token filename - {path}", {"path": path})
        self.path = path


class InvalidChainFileError(InputDataError):
    """Raised when a chain file is not a JSON array of records."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Invalid token file - {path}: {reason}",
            {"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


class InvalidTokenError(InputDataError):
    """Raised when a record inside a chain file is unusable."""

    def __init__(self, path: str, record: Any, reason: str):
        super().__init__(
            f"Invalid token in file, {reason} - {path} - {json.dumps(record, ensure_ascii=False, default=str)}",
            {"path": path, "record": record, "reason": reason},
        )
        self.path = path
        self.record = record
        self.reason = reason


class InvalidTemplateError(InputDataError):
    """Raised when the token list template cannot be used."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Invalid token list template - {path}: {reason}",
            {"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


class SchemaValidationError(InputDataError):
    """Raised when the assembled token list violates the token list schema."""

    def __init__(self, violations: list[str]):
        super().__init__(
            f"Invalid token list, {len(violations)} schema violation(s)",
            {"violations": violations},
        )
        self.violations = violations


class MissingInputError(TokenListError):
    """Raised when a required input file or directory does not exist."""

    exit_code = ExitCode.NO_INPUT

    def __init__(self, path: str, what: str):
        super().__init__(f"Missing {what}: {path}", {"path": path, "what": what})
        self.path = path
        self.what = what


class ConfigurationError(TokenListError):
    """Raised when configuration is invalid."""

    exit_code = ExitCode.USAGE

    def __init__(self, config_key: str, message: str):
        full_message = f"Configuration error [{config_key}]: {message}"
        super().__init__(full_message, {"config_key": config_key})
        self.config_key = config_key


class StorageError(TokenListError):
    """Raised when remote storage returns an unusable upload response."""

    def __init__(self, key: str, message: str, status_code: int | None = None):
        super().__init__(
            f"[storage] {message} (key: {key})",
            {"key": key, "status_code": status_code},
        )
        self.key = key
        self.status_code = status_code
