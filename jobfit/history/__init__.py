from .resume_history import ResumeHistoryStore

__all__ = ["ResumeHistoryStore"]
