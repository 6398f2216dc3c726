from __future__ import annotations

import re
import unicodedata


def _is_printable(char: str) -> bool:
    return char == "\n" or not unicodedata.category(char).startswith("C")


def clean_text(text: str) -> str:
    """Normalize whitespace and drop control, format and private-use characters.

    Accented letters, bullets and other printable Unicode are kept.
    """
    if not text:
        return ""
    text = re.sub(r"\r\n|\r", "\n", text)
    text = text.replace("\t", " ")
    text = "".join(char for char in text if _is_printable(char))
    text = re.sub(r" +", " ", text)
    text = re.sub(r"\n\s*\n", "\n\n", text)
    return text.strip()
