"""Text sanitization utilities."""

import re
import unicodedata
from typing import Any

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_label(text: Any, max_length: int = 200) -> str | None:
    """
    Sanitize an untrusted display label (theme, asset or field name).

    Converts to str, NFC-normalizes (mixed Hangul/Latin names compare
    stably after this), drops control characters, collapses whitespace
    and truncates to max_length.

    Args:
        text: Label to sanitize (may be None or a non-string)
        max_length: Maximum length before truncation

    Returns:
        Sanitized label, or None if input was None or blank
    """
    if text is None:
        return None

    label = unicodedata.normalize("NFC", str(text))
    label = _CONTROL_CHARS.sub("", label)
    label = _WHITESPACE.sub(" ", label).strip()

    if len(label) > max_length:
        label = label[:max_length] + "..."

    return label or None


def normalize_keyword(text: Any) -> str:
    """Normalize a search keyword or field: NFC, trimmed, lower-case."""
    if text is None:
        return ""
    return unicodedata.normalize("NFC", str(text)).strip().lower()
