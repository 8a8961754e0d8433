"""Exception hierarchy for the chunk selection stage."""


class ChunkselError(Exception):
    """Base class for all chunksel errors."""


class ConfigurationError(ChunkselError):
    """Raised when a build-time asset or configuration value is unusable."""


class PatternCompileError(ConfigurationError):
    """Raised when a built-in pattern compiles to nothing or exceeds limits."""


class UnsupportedTagsetError(ConfigurationError):
    """Raised when a sentence declares a tagset with no selection rule."""


class FeatureOverflowError(ChunkselError):
    """Raised when a chunk's features exceed the feature buffer capacity."""
