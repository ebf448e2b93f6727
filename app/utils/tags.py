"""Hashtag extraction for post content."""

from __future__ import annotations

import re
from typing import Final

_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"#(\w+)")


def normalize_tag(value: str) -> str:
    """Return ``value`` lowercased and without a leading ``#``."""

    return value.strip().lstrip("#").lower()


def extract_tags(content: str | None) -> list[str]:
    """Return the distinct hashtags in ``content`` preserving first appearance."""

    if not content:
        return []

    tags: list[str] = []
    for match in _TAG_PATTERN.finditer(content):
        tag = normalize_tag(match.group(1))
        if tag and tag not in tags:
            tags.append(tag)
    return tags
