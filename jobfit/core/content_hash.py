from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import BaseModel

FINGERPRINT_LENGTH = 8


def _canonical_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, BaseModel):
        content = content.model_dump(mode="json")
    return json.dumps(content, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def fingerprint(content: Any) -> str | None:
    """Short content digest used only to decide whether a cached report is reusable.

    Strings hash as-is; models, mappings and lists are serialized with sorted
    keys first so equal content always yields the same value. Returns None
    only when there is no content at all.
    """
    if content is None:
        return None
    digest = hashlib.md5(_canonical_text(content).encode("utf-8"), usedforsecurity=False)
    return digest.hexdigest()[:FINGERPRINT_LENGTH]
