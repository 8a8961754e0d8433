"""Sentence, chunk and token containers.

Tokens and chunk ranges are produced upstream (morphological analysis and
chunking). The selector only reads token fields and writes the chunk-level
result fields ``head_pos``, ``func_pos`` and ``feature_list``.
"""

import csv
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from .errors import ConfigurationError

# Marks an unset POS subfield; reading stops at the first one.
UNSET_FIELD = "*"


class PosSet(IntEnum):
    """POS tagset layouts understood by the pipeline."""

    IPA = 0
    JUMAN = 1
    UNIDIC = 2

    @classmethod
    def parse(cls, value: Union[str, int, "PosSet"]) -> "PosSet":
        """Resolve a tagset from its name or numeric value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ConfigurationError(f"Unknown posset: {value}")
        name = str(value).strip().upper()
        if name not in cls.__members__:
            raise ConfigurationError(f"Unknown posset: {value}")
        return cls[name]


class OutputLayer(IntEnum):
    """Processing stage a sentence has reached."""

    RAW_SENTENCE = 0
    POS = 1
    CHUNK = 2
    SELECTION = 3
    DEP = 4


def split_feature(feature: str) -> Tuple[str, ...]:
    """Split a comma-joined POS description, honouring double quotes."""
    if not feature:
        return ()
    return tuple(next(csv.reader([feature])))


@dataclass
class Token:
    """A single morpheme.

    Attributes
    ----------
    surface : str
        Surface form as it appeared in the input
    feature : str
        Raw comma-joined POS description
    feature_list : Tuple[str, ...]
        POS subfields; ``*`` marks an unset field
    normalized_surface : str
        Surface after character normalization (defaults to ``surface``)
    ne : Optional[str]
        Named-entity tag carried through from the input
    """

    surface: str
    feature: str = ""
    feature_list: Tuple[str, ...] = ()
    normalized_surface: Optional[str] = None
    ne: Optional[str] = None

    def __post_init__(self) -> None:
        if self.normalized_surface is None:
            self.normalized_surface = self.surface
        self.feature_list = tuple(self.feature_list)

    @classmethod
    def from_feature(
        cls,
        surface: str,
        feature: str,
        normalized_surface: Optional[str] = None,
        ne: Optional[str] = None,
    ) -> "Token":
        """Build a token from its surface and raw feature string."""
        return cls(
            surface=surface,
            feature=feature,
            feature_list=split_feature(feature),
            normalized_surface=normalized_surface,
            ne=ne,
        )

    @property
    def feature_list_size(self) -> int:
        return len(self.feature_list)

    def get_field(self, idx: int) -> Optional[str]:
        """Return subfield ``idx``, or None if it is missing or unset."""
        if idx >= len(self.feature_list):
            return None
        value = self.feature_list[idx]
        if value == UNSET_FIELD:
            return None
        return value

    def basic_fields(self, size: int) -> List[str]:
        """Return the leading ``size`` subfields, stopping at the first ``*``."""
        fields = []
        for value in self.feature_list[:size]:
            if value == UNSET_FIELD:
                break
            fields.append(value)
        return fields


@dataclass
class Chunk:
    """A contiguous token span treated as one syntactic unit.

    Attributes
    ----------
    token_pos : int
        Index of the first token in the sentence
    token_size : int
        Number of tokens in the chunk
    link : int
        Dependency link read from the input (-1 if none)
    score : float
        Link score read from the input
    head_pos : int
        Head token offset relative to ``token_pos``
    func_pos : int
        Function token offset relative to ``token_pos``
    feature_list : List[str]
        Generated ``NAME:VALUE`` feature tokens
    """

    token_pos: int
    token_size: int
    link: int = -1
    score: float = 0.0
    head_pos: int = 0
    func_pos: int = 0
    feature_list: List[str] = field(default_factory=list)

    @property
    def token_end(self) -> int:
        return self.token_pos + self.token_size

    @property
    def feature_list_size(self) -> int:
        return len(self.feature_list)


@dataclass
class Sentence:
    """Ordered tokens and the chunks that partition them."""

    tokens: List[Token] = field(default_factory=list)
    chunks: List[Chunk] = field(default_factory=list)
    posset: PosSet = PosSet.IPA
    output_layer: OutputLayer = OutputLayer.CHUNK
    charset: str = "UTF-8"

    def token(self, idx: int) -> Token:
        return self.tokens[idx]

    def chunk(self, idx: int) -> Chunk:
        return self.chunks[idx]

    def token_size(self) -> int:
        return len(self.tokens)

    def chunk_size(self) -> int:
        return len(self.chunks)

    def chunk_tokens(self, chunk: Chunk) -> List[Token]:
        return self.tokens[chunk.token_pos:chunk.token_end]

    def add_token(self, token: Token) -> Token:
        self.tokens.append(token)
        return token

    def add_chunk(self, token_size: int, link: int = -1, score: float = 0.0) -> Chunk:
        """Append a chunk covering the next ``token_size`` tokens."""
        token_pos = self.chunks[-1].token_end if self.chunks else 0
        chunk = Chunk(token_pos=token_pos, token_size=token_size, link=link, score=score)
        self.chunks.append(chunk)
        return chunk

    def set_output_layer(self, layer: OutputLayer) -> None:
        self.output_layer = layer
