from .similarity import ProfileSimilarityAnalyzer

__all__ = ["ProfileSimilarityAnalyzer"]
