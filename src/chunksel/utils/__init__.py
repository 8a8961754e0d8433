from .validators import SentenceValidator
from .statistics import FeatureStatistics

__all__ = ["SentenceValidator", "FeatureStatistics"]
