"""Assembly and schema validation of the final token list document."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from jsonschema import Draft7Validator

from ..core.exceptions import SchemaValidationError
from ..core.models import TokenRecord

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "tokenlist.schema.json"


def assemble_token_list(
    template: dict[str, Any],
    tokens: Iterable[TokenRecord],
) -> dict[str, Any]:
    """Merge the template with the token array, keeping template key order."""
    return {
        **template,
        "tokens": [token.to_dict() for token in tokens],
    }


def load_schema(path: Path = SCHEMA_PATH) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _format_violation(error) -> str:
    location = "/" + "/".join(str(p) for p in error.absolute_path)
    return f"{location} [{error.validator}]: {error.message}"


class TokenListValidator:
    """Validates token list documents against the token list schema."""

    def __init__(self, schema: dict[str, Any] | None = None):
        schema = schema if schema is not None else load_schema()
        Draft7Validator.check_schema(schema)
        self._validator = Draft7Validator(
            schema,
            format_checker=Draft7Validator.FORMAT_CHECKER,
        )

    def violations(self, document: dict[str, Any]) -> list[str]:
        """Every schema violation in ``document``."""
        return [_format_violation(e) for e in self._validator.iter_errors(document)]

    def validate(self, document: dict[str, Any]) -> None:
        """Raise SchemaValidationError listing all violations, if any."""
        violations = self.violations(document)
        if violations:
            raise SchemaValidationError(violations)
        logger.debug(f"Token list is valid ({len(document.get('tokens', []))} tokens)")
