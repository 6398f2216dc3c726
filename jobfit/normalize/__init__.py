from .normalize_resume import normalize_resume, repair_structured_payload

__all__ = ["normalize_resume", "repair_structured_payload"]
