"""Tagset-specific pattern tables and head/function selection rules.

The two supported tagsets mark function words with opposite conventions:
IPA patterns name the function words themselves, JUMAN patterns name the
tokens excluded from each role. Each convention is kept in its own rule.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import yaml

from ..config import DEFAULT_PATTERN_FILE
from ..errors import ConfigurationError, UnsupportedTagsetError
from ..tree import PosSet, Token
from .pattern_matcher import PatternMatcher

SHARED_PATTERNS = ("punctuation", "open_bracket", "close_bracket", "dyn_a", "case")
TAGSET_PATTERNS = ("func", "head")
SUPPORTED_TAGSETS = (PosSet.IPA, PosSet.JUMAN)

# Number of leading POS subfields that describe the basic part of speech.
BASIC_FIELD_COUNT: Dict[PosSet, int] = {
    PosSet.IPA: 4,
    PosSet.JUMAN: 2,
}


def basic_field_count(posset: PosSet) -> int:
    """Return how many leading subfields are basic POS fields for ``posset``."""
    if posset not in BASIC_FIELD_COUNT:
        raise UnsupportedTagsetError(f"Unsupported posset: {PosSet(posset).name}")
    return BASIC_FIELD_COUNT[posset]


@dataclass
class PatternTable:
    """Pattern sources keyed by name.

    Attributes
    ----------
    shared : Dict[str, str]
        Patterns used for every tagset
    tagsets : Dict[PosSet, Dict[str, str]]
        Per-tagset ``func`` and ``head`` patterns
    """

    shared: Dict[str, str] = field(default_factory=dict)
    tagsets: Dict[PosSet, Dict[str, str]] = field(default_factory=dict)

    def items(self) -> List[Tuple[str, str]]:
        """Return ``(qualified_name, source)`` pairs in compile order."""
        pairs = []
        for posset in SUPPORTED_TAGSETS:
            for name in TAGSET_PATTERNS:
                pairs.append((f"{posset.name.lower()}_{name}", self.tagsets[posset][name]))
        for name in SHARED_PATTERNS:
            pairs.append((name, self.shared[name]))
        return pairs


def load_pattern_table(path: Optional[Path] = None) -> PatternTable:
    """Load the pattern table from YAML.

    Parameters
    ----------
    path : Optional[Path]
        YAML file; defaults to the packaged table

    Returns
    -------
    PatternTable
        Validated table holding every required pattern

    Raises
    ------
    ConfigurationError
        If the file is unreadable or a required pattern is missing
    """
    if path is None:
        path = DEFAULT_PATTERN_FILE

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot load pattern table {path}: {e}")

    if not isinstance(config, dict):
        raise ConfigurationError(f"Pattern table {path} must be a dictionary")

    shared = config.get("shared") or {}
    tagsets = config.get("tagsets") or {}

    table = PatternTable()
    for name in SHARED_PATTERNS:
        table.shared[name] = _require_source(shared, name, path)

    for posset in SUPPORTED_TAGSETS:
        entry = tagsets.get(posset.name.lower())
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Pattern table {path} has no tagset '{posset.name.lower()}'")
        table.tagsets[posset] = {
            name: _require_source(entry, name, path) for name in TAGSET_PATTERNS
        }

    return table


def _require_source(section: Dict, name: str, path: Path) -> str:
    value = section.get(name)
    if not isinstance(value, str):
        raise ConfigurationError(f"Pattern '{name}' in {path} must be a string")
    return value


class HeadRule(ABC):
    """Chooses the head and function tokens of a chunk.

    Parameters
    ----------
    func_pattern : PatternMatcher
        Function-word pattern, prefix-matched against raw features
    head_pattern : PatternMatcher
        Head-exclusion pattern, prefix-matched against raw features
    """

    def __init__(self, func_pattern: PatternMatcher, head_pattern: PatternMatcher):
        self.func_pattern = func_pattern
        self.head_pattern = head_pattern

    @abstractmethod
    def find_head(self, tokens: Sequence[Token], start: int, end: int) -> Tuple[int, int]:
        """Return absolute ``(head, func)`` indices for tokens[start:end].

        Parameters
        ----------
        tokens : Sequence[Token]
            All tokens of the sentence
        start : int
            Index of the chunk's first token
        end : int
            One past the chunk's last token

        Returns
        -------
        Tuple[int, int]
            Head and function token indices
        """
        pass


class IPAHeadRule(HeadRule):
    """Function words are matched directly; the head may not follow them."""

    def find_head(self, tokens: Sequence[Token], start: int, end: int) -> Tuple[int, int]:
        head = func = start
        for j in range(start, end):
            feature = tokens[j].feature
            if self.func_pattern.prefix_match(feature):
                func = j
            elif not self.head_pattern.prefix_match(feature):
                head = j

        if head > func:
            func = head
        return head, func


class JumanHeadRule(HeadRule):
    """Both roles go to the last token not excluded for that role."""

    def find_head(self, tokens: Sequence[Token], start: int, end: int) -> Tuple[int, int]:
        head = func = start
        for j in range(start, end):
            feature = tokens[j].feature
            if not self.func_pattern.prefix_match(feature):
                func = j
            if not self.head_pattern.prefix_match(feature):
                head = j
        return head, func


HEAD_RULES = {
    PosSet.IPA: IPAHeadRule,
    PosSet.JUMAN: JumanHeadRule,
}


def build_head_rules(matchers: Dict[str, PatternMatcher]) -> Dict[PosSet, HeadRule]:
    """Instantiate one head rule per supported tagset from compiled patterns."""
    rules = {}
    for posset, rule_cls in HEAD_RULES.items():
        prefix = posset.name.lower()
        rules[posset] = rule_cls(matchers[f"{prefix}_func"], matchers[f"{prefix}_head"])
    return rules
