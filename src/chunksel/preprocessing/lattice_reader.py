"""Reader for chunked lattice input.

Each sentence is a block of lines terminated by ``EOS``::

    * 0 1D 0/1 0.000000
    太郎	名詞,固有名詞,人名,名,*,*,太郎,タロウ,タロー
    は	助詞,係助詞,*,*,*,*,は,ハ,ワ
    * 1 -1D 0/0 0.000000
    走る	動詞,自立,*,*,五段・ラ行,基本形,走る,ハシル,ハシル
    EOS

A ``*`` line opens a chunk; the link and score columns are kept, the
head/function column is ignored since the selector recomputes it.
"""

import io
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from ..tree import OutputLayer, PosSet, Sentence, Token
from .charset import resolve_charset

EOS = "EOS"


class LatticeReader:
    """Parse chunked lattice text into `Sentence` objects.

    Parameters
    ----------
    posset : Union[PosSet, str]
        Tagset of the token features
    charset : str
        Encoding used when reading files
    """

    def __init__(self, posset: Union[PosSet, str] = PosSet.IPA, charset: str = "UTF-8"):
        self.posset = PosSet.parse(posset)
        self.charset = charset
        self.encoding = resolve_charset(charset)

    def read(self, stream: Iterable[str]) -> Iterator[Sentence]:
        """Yield sentences from an iterable of lines."""
        sentence: Optional[Sentence] = None

        for lineno, raw in enumerate(stream, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue

            if line.rstrip() == EOS:
                yield sentence if sentence is not None else self._new_sentence()
                sentence = None
                continue

            if sentence is None:
                sentence = self._new_sentence()

            if line.startswith("* "):
                link, score = self._parse_chunk_line(line, lineno)
                sentence.add_chunk(0, link=link, score=score)
                continue

            if not sentence.chunks:
                raise ValueError(f"Line {lineno}: token appears before any chunk line")

            sentence.add_token(self._parse_token_line(line, lineno))
            sentence.chunks[-1].token_size += 1

        if sentence is not None:
            yield sentence

    def read_file(self, path: Union[str, Path]) -> List[Sentence]:
        """Read every sentence from a lattice file."""
        with open(path, "r", encoding=self.encoding) as f:
            return list(self.read(f))

    def parse_string(self, text: str) -> List[Sentence]:
        """Read every sentence from lattice text held in memory."""
        return list(self.read(io.StringIO(text)))

    def _new_sentence(self) -> Sentence:
        return Sentence(posset=self.posset, output_layer=OutputLayer.CHUNK, charset=self.charset)

    @staticmethod
    def _parse_chunk_line(line: str, lineno: int):
        cols = line.split(" ")
        if len(cols) < 3 or not cols[2].endswith("D"):
            raise ValueError(f"Line {lineno}: malformed chunk line: {line!r}")
        try:
            link = int(cols[2][:-1])
            score = float(cols[4]) if len(cols) > 4 else 0.0
        except ValueError:
            raise ValueError(f"Line {lineno}: malformed chunk line: {line!r}")
        return link, score

    @staticmethod
    def _parse_token_line(line: str, lineno: int) -> Token:
        cols = line.split("\t")
        if len(cols) < 2:
            raise ValueError(f"Line {lineno}: token line needs a surface and a feature: {line!r}")
        ne = cols[2] if len(cols) > 2 else None
        return Token.from_feature(cols[0], cols[1], ne=ne)
