"""Escaping of API-supplied text for embedding in HTML/JS contexts."""

from __future__ import annotations

import re

_SUBSTITUTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"<"), "&lt;"),
    (re.compile(r">"), "&gt;"),
    (re.compile(r"\("), "&#40;"),
    (re.compile(r"\)"), "&#41;"),
    (re.compile(r'"'), "&#34;"),
    (re.compile(r"'"), "&#39;"),
    (re.compile(r"eval\((.*)\)"), ""),
    (re.compile(r"[\"'][\s]*javascript:(.*)[\"']"), '""'),
    (re.compile(r"script"), ""),
)


def clean_xss(value: str | None) -> str:
    """Apply the fixed substitution sequence. ``None`` becomes an empty string."""
    if value is None:
        return ""
    result = value
    for pattern, replacement in _SUBSTITUTIONS:
        result = pattern.sub(replacement, result)
    return result
