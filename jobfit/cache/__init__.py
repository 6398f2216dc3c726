from .analysis_cache import AnalysisCache, is_fresh

__all__ = ["AnalysisCache", "is_fresh"]
