from .clean import clean_text
from .models import ParsedDoc
from .parse import extract_text, parse_document_bytes

__all__ = ["ParsedDoc", "clean_text", "extract_text", "parse_document_bytes"]
