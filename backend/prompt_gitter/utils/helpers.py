"""Utility helper functions."""

import base64
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify_title(title: str) -> str:
    """
    Convert a prompt title to the kebab-case base of its filename.

    Args:
        title: The prompt title

    Returns:
        Lower-cased title with every run of non-alphanumerics collapsed to "-"
    """
    return _NON_ALNUM.sub("-", title.lower()).strip("-")


def derive_filename(
    title: str,
    records: Iterable,
    timestamp_ms: int,
    exclude_id: Optional[str] = None,
) -> str:
    """
    Derive the content filename for a prompt title.

    The count of existing filenames sharing the base is appended right after
    the timestamp digits when there is at least one such filename.

    Args:
        title: The prompt title
        records: Existing index records (anything with ``id`` and ``filename``)
        timestamp_ms: Generation time in epoch milliseconds
        exclude_id: Record id left out of the collision scan (the record being renamed)

    Returns:
        Filename such as ``my-prompt-1718000000000.md``
    """
    base = slugify_title(title)
    matches = [
        record
        for record in records
        if record.id != exclude_id and record.filename.startswith(f"{base}-")
    ]
    suffix = str(len(matches)) if matches else ""
    return f"{base}-{timestamp_ms}{suffix}.md"


def next_prompt_id(records: Iterable, timestamp_ms: int) -> int:
    """Return a time-based id strictly greater than every numeric id in the index."""
    existing = [int(record.id) for record in records if record.id.isdecimal()]
    if existing and max(existing) >= timestamp_ms:
        return max(existing) + 1
    return timestamp_ms


def utc_now() -> datetime:
    """Get the current UTC time."""
    return datetime.now(timezone.utc)


def epoch_ms(moment: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return int(moment.timestamp() * 1000)


def to_iso(moment: datetime) -> str:
    """Format a datetime as ISO 8601 UTC with milliseconds and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing Z."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_tags(tags: Union[str, Iterable[str]]) -> List[str]:
    """
    Normalize tags from a comma-separated string or a list.

    Tags are trimmed, empty tags dropped and duplicates removed, first seen wins.
    """
    if isinstance(tags, str):
        tags = tags.split(",")
    result: List[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in result:
            result.append(tag)
    return result


def encode_content(text: str) -> str:
    """Base64-encode UTF-8 text for the contents API."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(payload: str) -> str:
    """Decode base64 content from the contents API (line breaks allowed)."""
    return base64.b64decode(payload).decode("utf-8")
