"""Literal pattern matching for POS and surface markers.

A pattern is either a single literal (``助詞``) or a parenthesized,
``|``-separated list of literal alternatives (``(、|。|，)``). Alternatives
keep their declaration order, which decides ties in both queries.
"""

import logging
from typing import List, Optional, Tuple

from ..errors import PatternCompileError

logger = logging.getLogger(__name__)

DEFAULT_MAX_PATTERN_LENGTH = 8192
DEFAULT_MAX_ALTERNATIVES = 8192


class PatternMatcher:
    """Compiled set of literal alternatives.

    Parameters
    ----------
    max_pattern_length : int
        Upper bound on the length of a pattern source
    max_alternatives : int
        Upper bound on the number of alternatives in one pattern
    """

    def __init__(
        self,
        max_pattern_length: int = DEFAULT_MAX_PATTERN_LENGTH,
        max_alternatives: int = DEFAULT_MAX_ALTERNATIVES,
    ):
        self.max_pattern_length = max_pattern_length
        self.max_alternatives = max_alternatives
        self._patterns: List[str] = []

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"PatternMatcher({self._patterns!r})"

    def clear(self) -> None:
        self._patterns = []

    def compile(self, pattern: str, normalizer=None) -> bool:
        """Compile ``pattern`` into its list of alternatives.

        Parameters
        ----------
        pattern : str
            A literal or ``(alt1|alt2|...)``
        normalizer : Optional[CharsetNormalizer]
            Converts the pattern into the internal charset before splitting.
            A failed conversion is logged and the original text is used.

        Returns
        -------
        bool
            False if the pattern has no alternatives

        Raises
        ------
        PatternCompileError
            If the pattern exceeds the configured size limits
        """
        self.clear()
        converted = pattern
        if normalizer is not None:
            converted, ok = normalizer.convert(pattern)
            if not ok:
                logger.warning("cannot convert: %s", pattern)

        if len(converted) >= self.max_pattern_length - 3:
            raise PatternCompileError(f"too long parameter: {len(converted)} characters")

        if len(converted) >= 2 and converted[0] == "(" and converted[-1] == ")":
            alternatives = [alt for alt in converted[1:-1].split("|") if alt]
            if len(alternatives) >= self.max_alternatives:
                raise PatternCompileError(f"too long OR nodes: {len(alternatives)} alternatives")
            self._patterns.extend(alternatives)
        elif converted:
            self._patterns.append(converted)

        return bool(self._patterns)

    def match(self, text: Optional[str]) -> Optional[str]:
        """Return the first alternative equal to ``text``."""
        if text is None:
            return None
        for pattern in self._patterns:
            if pattern == text:
                return pattern
        return None

    def prefix_match(self, text: Optional[str]) -> Optional[str]:
        """Return the first alternative that ``text`` starts with."""
        if text is None:
            return None
        for pattern in self._patterns:
            if len(text) < len(pattern):
                continue
            if text.startswith(pattern):
                return pattern
        return None
