"""Shared fixtures and sentence builders for the test suite."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence, Tuple

import pytest


def _ensure_src_on_path() -> None:
    src_root = Path(__file__).resolve().parents[1] / "src"
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))


_ensure_src_on_path()

from chunksel.config import SelectorConfig  # noqa: E402
from chunksel.rules.selector import Selector  # noqa: E402
from chunksel.tree import PosSet, Sentence, Token  # noqa: E402


def build_sentence(
    chunks: Sequence[Sequence[Tuple[str, str]]], posset: PosSet = PosSet.IPA
) -> Sentence:
    """Build a sentence from chunks of ``(surface, feature)`` pairs."""
    sentence = Sentence(posset=posset)
    for chunk_tokens in chunks:
        for surface, feature in chunk_tokens:
            sentence.add_token(Token.from_feature(surface, feature))
        sentence.add_chunk(len(chunk_tokens))
    return sentence


@pytest.fixture
def selector() -> Selector:
    sel = Selector()
    sel.open(SelectorConfig())
    yield sel
    sel.close()


@pytest.fixture
def ipa_sentence() -> Sentence:
    return build_sentence(
        [
            [
                ("太郎", "名詞,固有名詞,人名,名,*,*,太郎,タロウ,タロー"),
                ("は", "助詞,係助詞,*,*,*,*,は,ハ,ワ"),
            ],
            [
                ("走っ", "動詞,自立,*,*,五段・ラ行,連用タ接続,走る,ハシッ,ハシッ"),
                ("た", "助動詞,*,*,*,特殊・タ,基本形,た,タ,タ"),
                ("。", "記号,句点,*,*,*,*,。,。,。"),
            ],
        ]
    )
