"""Jinja2 custom filters for the screener pages.

All filters are registered on the template environment in cards.py.
"""

from __future__ import annotations

from urllib.parse import urlsplit

_SAFE_SCHEMES = {"", "http", "https", "mailto"}


def format_progress(value: float | None) -> str:
    """Format a progress percentage for a CSS width: 33.333 -> "33.33%"."""
    if value is None:
        return "0%"
    return f"{value:.2f}".rstrip("0").rstrip(".") + "%"


def safe_url(value: str | None, fallback: str = "#") -> str:
    """Drop links with a scheme a benefit card should never carry (javascript:, data:)."""
    if not value:
        return fallback
    try:
        scheme = urlsplit(value.strip()).scheme.lower()
    except ValueError:
        return fallback
    if scheme not in _SAFE_SCHEMES:
        return fallback
    return value
