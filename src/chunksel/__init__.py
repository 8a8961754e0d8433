"""Head/function selection and feature extraction for chunked sentences.

The selector is the stage between chunking and dependency attachment:
1. Read chunked lattice input into sentences
2. Pick each chunk's head and function tokens with tagset-specific rules
3. Emit NAME:VALUE feature tokens per chunk
4. Vectorize the features for a downstream classifier
"""

__version__ = "1.0.0"

from .config import SelectorConfig, load_config
from .errors import (
    ChunkselError,
    ConfigurationError,
    FeatureOverflowError,
    PatternCompileError,
    UnsupportedTagsetError,
)
from .tree import Chunk, OutputLayer, PosSet, Sentence, Token
from .rules import PatternMatcher, Selector

__all__ = [
    # Configuration
    "SelectorConfig",
    "load_config",
    # Data model
    "Token",
    "Chunk",
    "Sentence",
    "PosSet",
    "OutputLayer",
    # Selection
    "PatternMatcher",
    "Selector",
    # Errors
    "ChunkselError",
    "ConfigurationError",
    "PatternCompileError",
    "UnsupportedTagsetError",
    "FeatureOverflowError",
]
