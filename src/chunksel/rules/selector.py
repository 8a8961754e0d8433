"""Head/function selection and chunk feature generation.

For every chunk of a sentence the selector picks the head and function
tokens, then emits the ``NAME:VALUE`` feature tokens the dependency
classifier consumes:

- ``G_PUNC``/``F_PUNC``, ``G_OB``/``F_OB``, ``G_CB``/``F_CB``: punctuation
  and bracket tokens anywhere in the chunk
- ``F_H0``..``F_H6``: head surface, basic POS fields, conjugation type/form
- ``F_F0``..``F_Fn``: function surface and basic POS fields
- ``A``, ``B``: function and head classes
- ``G_CASE``: function token is a case marker
- ``F_BOS``, ``F_EOS``: first and last chunk of the sentence
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..config import SelectorConfig
from ..errors import FeatureOverflowError, PatternCompileError, UnsupportedTagsetError
from ..preprocessing.charset import CharsetNormalizer
from ..tree import Chunk, OutputLayer, PosSet, Sentence, Token
from ..utils.validators import SentenceValidator
from .pattern_matcher import PatternMatcher
from .tagsets import HeadRule, basic_field_count, build_head_rules, load_pattern_table

logger = logging.getLogger(__name__)

# Joins basic POS fields into the A and B class values.
CLASS_DELIMITER = "-"


class FeatureBuffer:
    """Fixed-capacity buffer for one chunk's feature text.

    Parameters
    ----------
    max_length : int
        Maximum number of characters the assembled text may hold
    max_count : int
        Maximum number of feature tokens after splitting
    """

    def __init__(self, max_length: int = 2048, max_count: int = 256):
        self.max_length = max_length
        self.max_count = max_count
        self._parts: List[str] = []
        self._length = 0

    def add(self, name: str, value) -> None:
        part = f" {name}:{value}"
        if self._length + len(part) >= self.max_length:
            raise FeatureOverflowError(
                f"feature text exceeds {self.max_length} characters at {name}"
            )
        self._parts.append(part)
        self._length += len(part)

    def text(self) -> str:
        return "".join(self._parts)

    def tokenize(self) -> List[str]:
        """Split the text on runs of spaces into feature tokens."""
        features = [f for f in self.text().split(" ") if f]
        if len(features) > self.max_count:
            raise FeatureOverflowError(
                f"{len(features)} feature tokens exceed the limit of {self.max_count}"
            )
        return features


class Selector:
    """Selects head/function tokens and generates chunk features.

    Call `open` once before parsing; compiled patterns are read-only
    afterwards, so one opened selector can serve many sentences.
    """

    def __init__(self):
        self.config: Optional[SelectorConfig] = None
        self.patterns: Dict[str, PatternMatcher] = {}
        self.head_rules: Dict[PosSet, HeadRule] = {}
        self.validator = SentenceValidator()

    def __enter__(self) -> "Selector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self, config: Optional[SelectorConfig] = None) -> bool:
        """Compile the built-in patterns.

        Parameters
        ----------
        config : Optional[SelectorConfig]
            Charset, pattern table and buffer limits; defaults apply if None

        Returns
        -------
        bool
            True once every pattern has compiled

        Raises
        ------
        ConfigurationError
            If the pattern table cannot be loaded or any pattern fails to
            compile; the selector is unusable without them
        """
        self.config = config or SelectorConfig()
        normalizer = CharsetNormalizer(self.config.charset)
        table = load_pattern_table(self.config.pattern_path)

        patterns = {}
        for name, source in table.items():
            matcher = PatternMatcher(
                max_pattern_length=self.config.max_pattern_length,
                max_alternatives=self.config.max_alternatives,
            )
            if not matcher.compile(source, normalizer):
                raise PatternCompileError(f"pattern '{name}' has no alternatives: {source!r}")
            patterns[name] = matcher

        self.patterns = patterns
        self.head_rules = build_head_rules(patterns)
        logger.info(
            "Compiled %d selector patterns for charset %s", len(patterns), self.config.charset
        )
        return True

    def close(self) -> None:
        pass

    def find_head(self, sentence: Sentence, chunk: Chunk) -> Tuple[int, int]:
        """Return absolute ``(head, func)`` token indices for ``chunk``."""
        rule = self.head_rules.get(sentence.posset)
        if rule is None:
            raise UnsupportedTagsetError(f"Unsupported posset: {PosSet(sentence.posset).name}")
        return rule.find_head(sentence.tokens, chunk.token_pos, chunk.token_end)

    def parse(self, sentence: Optional[Sentence]) -> bool:
        """Select head/function tokens and write features for every chunk.

        Parameters
        ----------
        sentence : Optional[Sentence]
            Chunked sentence; its chunks are updated in place

        Returns
        -------
        bool
            False if the sentence is missing or structurally invalid

        Raises
        ------
        UnsupportedTagsetError
            If the sentence uses a tagset without a selection rule
        FeatureOverflowError
            If a chunk's features exceed the buffer limits; no chunk is
            modified in that case
        """
        if sentence is None:
            logger.warning("parse() called without a sentence")
            return False
        if not self.patterns:
            raise RuntimeError("Must call open() before parse()")

        pos_size = basic_field_count(sentence.posset)

        issues = self.validator.check_chunk_ranges(sentence)
        if issues:
            logger.warning("Rejected sentence: %s", "; ".join(issues))
            return False

        size = sentence.chunk_size()
        results = []
        for i in range(size):
            chunk = sentence.chunk(i)
            buf = FeatureBuffer(self.config.max_feature_length, self.config.max_feature_count)

            self._add_flags(buf, sentence.chunk_tokens(chunk))

            hid, fid = self.find_head(sentence, chunk)
            htoken = sentence.token(hid)
            ftoken = sentence.token(fid)
            self._add_token_features(buf, "F_H", htoken, pos_size, with_conjugation=True)
            self._add_token_features(buf, "F_F", ftoken, pos_size, with_conjugation=False)

            fcform = ftoken.get_field(pos_size + 1)
            if self.patterns["dyn_a"].prefix_match(ftoken.feature):
                buf.add("A", ftoken.normalized_surface)
            elif fcform is not None:
                buf.add("A", fcform)
            else:
                buf.add("A", concat_feature(ftoken, pos_size))

            buf.add("B", concat_feature(htoken, pos_size))

            if self.patterns["case"].prefix_match(ftoken.feature):
                buf.add("G_CASE", ftoken.normalized_surface)

            if i == 0:
                buf.add("F_BOS", 1)
            if i == size - 1:
                buf.add("F_EOS", 1)

            results.append((buf.tokenize(), hid - chunk.token_pos, fid - chunk.token_pos))

        # Chunks are only updated once every chunk has fit in its buffer.
        for chunk, (features, head_pos, func_pos) in zip(sentence.chunks, results):
            chunk.feature_list = features
            chunk.head_pos = head_pos
            chunk.func_pos = func_pos

        sentence.set_output_layer(OutputLayer.SELECTION)
        return True

    def _add_flags(self, buf: FeatureBuffer, tokens: List[Token]) -> None:
        for token in tokens:
            p = self.patterns["punctuation"].match(token.normalized_surface)
            if p:
                buf.add("G_PUNC", p)
                buf.add("F_PUNC", p)

            p = self.patterns["open_bracket"].match(token.normalized_surface)
            if p:
                buf.add("G_OB", p)
                buf.add("F_OB", p)

            p = self.patterns["close_bracket"].match(token.normalized_surface)
            if p:
                buf.add("G_CB", p)
                buf.add("F_CB", p)

    @staticmethod
    def _add_token_features(
        buf: FeatureBuffer, prefix: str, token: Token, pos_size: int, with_conjugation: bool
    ) -> None:
        buf.add(f"{prefix}0", token.normalized_surface)
        for k, value in enumerate(token.basic_fields(pos_size)):
            buf.add(f"{prefix}{k + 1}", value)

        if with_conjugation:
            ctype = token.get_field(pos_size)
            cform = token.get_field(pos_size + 1)
            if ctype is not None:
                buf.add(f"{prefix}5", ctype)
            if cform is not None:
                buf.add(f"{prefix}6", cform)


def concat_feature(token: Token, size: int) -> str:
    """Join the token's basic POS fields, stopping at the first ``*``."""
    return CLASS_DELIMITER.join(token.basic_fields(size))
