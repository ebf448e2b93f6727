"""Common validation helpers for user use cases."""

import re

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.]{3,50}$")


def ensure_valid_username(username: str) -> str:
    """Return a trimmed username or raise ``ValueError``."""

    normalized = (username or "").strip()
    if not _USERNAME_PATTERN.match(normalized):
        raise ValueError(
            "Username must be 3-50 characters of letters, digits, dots or underscores"
        )
    return normalized


def ensure_valid_email(email: str) -> str:
    """Return a normalized email address or raise ``ValueError``."""

    normalized = (email or "").strip()
    if normalized.count("@") != 1:
        raise ValueError("Please add a valid email")

    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain:
        raise ValueError("Please add a valid email")

    return f"{local_part}@{domain.lower()}"
