"""Version stamping for the token list template.

A bump advances the minor version, resets the patch version and
refreshes the timestamp. The stamped template is written back to the
template file and its version string is mirrored into the package
manifest, so the same run embeds the new version in the built list.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ..core.exceptions import InvalidTemplateError
from ..core.models import Version

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a template timestamp, returning None if it is not one."""
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def next_timestamp(previous: Any, now: datetime) -> str:
    """
    Timestamp for a new version, always later than the previous one.

    Args:
        previous: The template's current ``timestamp`` value
        now: Current wall-clock time

    Returns:
        Formatted timestamp strictly greater than ``previous``
    """
    last = parse_timestamp(previous)
    # Millisecond output resolution, so step at least one millisecond
    if last is not None and now < last + timedelta(milliseconds=1):
        now = last + timedelta(milliseconds=1)
    return format_timestamp(now)


def read_version(template: dict[str, Any], source: str = "template") -> Version:
    """Extract the version triple from a template."""
    try:
        return Version.model_validate(template.get("version"))
    except ValidationError as e:
        raise InvalidTemplateError(source, f"invalid version: {e.errors()[0]['msg']}") from e


def increment_version(
    template: dict[str, Any],
    now: Optional[datetime] = None,
    source: str = "template",
) -> dict[str, Any]:
    """Return a copy of ``template`` with a bumped version and timestamp."""
    version = read_version(template, source).bump_minor()
    timestamp = next_timestamp(template.get("timestamp"), now or utc_now())
    return {
        **template,
        "version": version.model_dump(),
        "timestamp": timestamp,
    }


def write_json_file(path: Path, data: dict[str, Any]) -> None:
    """Write a JSON document with two-space indent and a trailing newline."""
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


class VersionStamper:
    """Bumps the template version and keeps the package manifest in sync."""

    def __init__(self, template_path: Path, manifest_path: Path, clock: Clock = utc_now):
        self.template_path = template_path
        self.manifest_path = manifest_path
        self.clock = clock

    def stamp(self, template: dict[str, Any]) -> dict[str, Any]:
        """
        Bump the version once and persist it.

        Args:
            template: Template as read from the template file

        Returns:
            The updated template, also written to ``template_path``
        """
        updated = increment_version(template, self.clock(), source=str(self.template_path))
        write_json_file(self.template_path, updated)

        version = read_version(updated, str(self.template_path))
        self.sync_manifest(version)

        logger.info(f"Version incremented to {version}")
        return updated

    def sync_manifest(self, version: Version) -> None:
        """Write the ``major.minor.patch`` string into the manifest."""
        with open(self.manifest_path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
        write_json_file(self.manifest_path, {**manifest, "version": str(version)})
