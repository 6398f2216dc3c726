from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from jobfit.core.config import settings
from jobfit.core.content_hash import fingerprint
from jobfit.errors import DocumentTooLarge, ScannedOrEmptyDocument, UnsupportedDocument

from .clean import clean_text
from .models import ParsedDoc

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


def _parse_txt(content: bytes) -> tuple[str, int | None, list[str]]:
    try:
        return content.decode("utf-8"), None, []
    except UnicodeDecodeError:
        return content.decode("latin-1"), None, ["Text is not valid UTF-8; decoded as latin-1."]


def _parse_pdf(content: bytes) -> tuple[str, int | None, list[str]]:
    warnings: list[str] = []
    try:
        reader = PdfReader(BytesIO(content))
        text_parts: list[str] = []
        for index, page in enumerate(reader.pages, start=1):
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
            else:
                warnings.append(f"No extractable text on page {index}.")
        return "\n".join(text_parts), len(reader.pages), warnings
    except Exception as exc:
        raise UnsupportedDocument(f"Failed to parse PDF: {exc}") from exc


def _parse_docx(content: bytes) -> tuple[str, int | None, list[str]]:
    try:
        document = Document(BytesIO(content))
    except Exception as exc:
        raise UnsupportedDocument(f"Failed to parse DOCX: {exc}") from exc
    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    return "\n".join(paragraphs), None, []


_PARSERS = {
    ".txt": ("txt", _parse_txt),
    ".pdf": ("pdf", _parse_pdf),
    ".docx": ("docx", _parse_docx),
}


def parse_document_bytes(file_name: str, content: bytes, *, max_bytes: int | None = None) -> ParsedDoc:
    limit = settings.max_upload_bytes if max_bytes is None else max_bytes
    if len(content) > limit:
        raise DocumentTooLarge(f"File too large ({len(content)} bytes). Max size is {limit} bytes.")

    extension = Path(file_name).suffix.lower()
    if extension not in _PARSERS:
        raise UnsupportedDocument(
            f"Unsupported file type '{extension}'. Supported types: {', '.join(SUPPORTED_EXTENSIONS)}"
        )

    source_type, parser = _PARSERS[extension]
    raw_text, page_count, warnings = parser(content)
    text = clean_text(raw_text)
    if not text:
        logger.info("document_without_text file=%s source_type=%s", file_name, source_type)
        raise ScannedOrEmptyDocument(
            f"No extractable text found in '{file_name}'. It may be a scanned image."
        )

    return ParsedDoc(
        doc_id=fingerprint(text) or "",
        file_name=file_name,
        source_type=source_type,
        text=text,
        page_count=page_count,
        parsing_warnings=warnings,
    )


def extract_text(file_name: str, content: bytes) -> str:
    return parse_document_bytes(file_name, content).text
