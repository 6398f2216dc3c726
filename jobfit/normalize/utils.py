from __future__ import annotations

import math
import re
from typing import Any, Iterable

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?;])\s+(?=[A-Z0-9])")


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def contains_marker(text: str, markers: Iterable[str]) -> bool:
    lowered = normalize_line(text).lower()
    return any(re.search(rf"\b{re.escape(marker.lower())}\b", lowered) for marker in markers)


def clean_optional(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return None
    cleaned = normalize_line(value)
    if not cleaned or cleaned.lower() in {"null", "none", "n/a"}:
        return None
    return cleaned


def split_into_bullets(text: str) -> list[str]:
    """Turn a prose block or a pasted bullet list into one string per bullet."""
    lines = [normalize_line(line) for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return []

    if len(lines) > 1:
        return [strip_bullet_prefix(line) for line in lines if strip_bullet_prefix(line)]

    single = strip_bullet_prefix(lines[0])
    parts = [part.strip() for part in _SENTENCE_BREAK_RE.split(single)]
    return [part for part in parts if part]


class SchemaViolation(ValueError):
    """A delegate reply field has a type that cannot be repaired."""


def string_list(value: Any, *, path: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise SchemaViolation(f"'{path}' must be a list of strings")
    return [cleaned for cleaned in (clean_optional(item) for item in value) if cleaned]


def as_number(value: Any) -> float | None:
    """Finite float from a number or numeric string; None otherwise, NaN and infinities included."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip().rstrip("%")) if isinstance(value, str) else float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
