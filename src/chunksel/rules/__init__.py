"""Pattern matching, head/function selection and feature vectorization."""

from .pattern_matcher import PatternMatcher
from .tagsets import HeadRule, IPAHeadRule, JumanHeadRule, PatternTable, load_pattern_table
from .selector import FeatureBuffer, Selector, concat_feature
from .feature_extractor import ChunkFeatureVectorizer, FeatureMatrix, FeatureVocab

__all__ = [
    # Pattern matching
    "PatternMatcher",
    "PatternTable",
    "load_pattern_table",
    # Head/function rules
    "HeadRule",
    "IPAHeadRule",
    "JumanHeadRule",
    # Selection
    "Selector",
    "FeatureBuffer",
    "concat_feature",
    # Vectorization
    "ChunkFeatureVectorizer",
    "FeatureMatrix",
    "FeatureVocab",
]
