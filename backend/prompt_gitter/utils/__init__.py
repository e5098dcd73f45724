"""Utils package."""

from .helpers import (
    decode_content,
    derive_filename,
    encode_content,
    epoch_ms,
    next_prompt_id,
    normalize_tags,
    parse_iso,
    slugify_title,
    to_iso,
    utc_now,
)

__all__ = [
    "slugify_title",
    "derive_filename",
    "next_prompt_id",
    "utc_now",
    "epoch_ms",
    "to_iso",
    "parse_iso",
    "normalize_tags",
    "encode_content",
    "decode_content",
]
