"""Configuration for the chunk selection stage.

`SelectorConfig` holds everything `Selector.open` needs: the internal charset
the built-in pattern literals are normalized into, the default tagset for
lattice input, the pattern table location, and the fixed buffer limits.
`load_config` reads these settings from a YAML file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

# Packaged pattern table used when no pattern_file is configured.
DEFAULT_PATTERN_FILE = Path(__file__).parent / "resources" / "selector_patterns.yaml"


@dataclass
class SelectorConfig:
    """Settings for `Selector` and the surrounding tooling.

    Attributes
    ----------
    charset : str
        Internal charset pattern literals and input text are held in
    posset : str
        Tagset assumed for lattice input ("IPA" or "JUMAN")
    pattern_file : Optional[str]
        YAML pattern table; None selects the packaged table
    max_feature_length : int
        Capacity, in characters, of the per-chunk feature buffer
    max_feature_count : int
        Maximum number of feature tokens per chunk
    max_pattern_length : int
        Maximum length of a pattern source
    max_alternatives : int
        Maximum number of alternatives in one pattern
    """

    charset: str = "UTF-8"
    posset: str = "IPA"
    pattern_file: Optional[str] = None
    max_feature_length: int = 2048
    max_feature_count: int = 256
    max_pattern_length: int = 8192
    max_alternatives: int = 8192

    @property
    def pattern_path(self) -> Path:
        if self.pattern_file:
            return Path(self.pattern_file)
        return DEFAULT_PATTERN_FILE


def load_config(path: str = "chunksel.yaml") -> SelectorConfig:
    """Load a `SelectorConfig` from a YAML file.

    Parameters
    ----------
    path : str
        Path to the YAML file. A relative ``pattern_file`` inside it is
        resolved against the file's directory.

    Returns
    -------
    SelectorConfig
        Populated configuration; keys not present keep their defaults

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValueError
        If the file is not valid YAML
    TypeError
        If the YAML root is not a mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file at {path}: {e}")

    if y is None:
        y = {}
    if not isinstance(y, dict):
        raise TypeError(f"Configuration file {path} must be a dictionary.")

    defaults = SelectorConfig()

    pattern_file = y.get("pattern_file")
    if pattern_file:
        pattern_path = Path(pattern_file)
        if not pattern_path.is_absolute():
            pattern_path = Path(path).parent / pattern_path
        pattern_file = str(pattern_path)

    return SelectorConfig(
        charset=str(y.get("charset", defaults.charset)),
        posset=str(y.get("posset", defaults.posset)),
        pattern_file=pattern_file,
        max_feature_length=int(y.get("max_feature_length", defaults.max_feature_length)),
        max_feature_count=int(y.get("max_feature_count", defaults.max_feature_count)),
        max_pattern_length=int(y.get("max_pattern_length", defaults.max_pattern_length)),
        max_alternatives=int(y.get("max_alternatives", defaults.max_alternatives)),
    )
