"""Blob key naming and slug sanitization.

Generates collision-free keys from uploaded filenames.

Format: {prefix}/{slug}-{uuid32}.{ext}

Examples:
    >>> from blogbliss.storage.naming import sanitize_slug, generate_asset_key
    >>> sanitize_slug("My Holiday Photo (1)")
    'my-holiday-photo-1'
    >>> generate_asset_key("thumbnails", "Beach Day.JPG")
    'thumbnails/beach-day-3f2b1a...e9.jpg'
"""

from __future__ import annotations

import re
import uuid
from pathlib import PurePosixPath


def sanitize_slug(name: str, max_length: int = 60) -> str:
    """Sanitize a filename stem into a filesystem-safe slug.

    Rules:
        - Lowercase
        - Strip non-alphanumeric except hyphens
        - Collapse multiple hyphens
        - Truncate to max_length
        - Fallback to 'asset' if empty

    Args:
        name: Raw filename stem.
        max_length: Maximum slug length (default 60).

    Returns:
        Sanitized slug string.
    """
    slug = name.lower().strip()
    slug = re.sub(r"[\s_.]+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    slug = slug.strip("-")
    slug = slug[:max_length].rstrip("-")
    return slug or "asset"


def file_extension(filename: str | None) -> str:
    """Lowercased extension without the dot, or ``bin`` when there is none."""
    suffix = PurePosixPath(filename or "").suffix.lower().lstrip(".")
    suffix = re.sub(r"[^a-z0-9]", "", suffix)
    return suffix or "bin"


def generate_asset_key(
    prefix: str,
    filename: str | None,
    uuid_str: str | None = None,
) -> str:
    """Generate a unique key for an uploaded asset.

    Args:
        prefix: Key namespace (``thumbnails``, ``avatars``).
        filename: Client-supplied filename.
        uuid_str: Override UUID (defaults to random).

    Returns:
        Blob key string.
    """
    stem = sanitize_slug(PurePosixPath(filename or "").stem)
    if uuid_str is None:
        uuid_str = uuid.uuid4().hex
    return f"{prefix}/{stem}-{uuid_str}.{file_extension(filename)}"
