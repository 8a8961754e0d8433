import pytest

from chunksel.errors import ConfigurationError
from chunksel.tree import PosSet, Sentence, Token, split_feature


def test_split_feature_honours_quotes() -> None:
    assert split_feature('記号,一般,*,*,*,*,",",",",","') == (
        "記号", "一般", "*", "*", "*", "*", ",", ",", ",",
    )
    assert split_feature("") == ()


def test_token_fields_stop_at_unset_marker() -> None:
    token = Token.from_feature("は", "助詞,係助詞,*,*,*,*,は,ハ,ワ")

    assert token.normalized_surface == "は"
    assert token.feature_list_size == 9
    assert token.basic_fields(4) == ["助詞", "係助詞"]
    assert token.get_field(2) is None
    assert token.get_field(6) == "は"
    assert token.get_field(20) is None


def test_basic_fields_respect_declared_count() -> None:
    token = Token(surface="x", feature="名詞", feature_list=("名詞",))

    assert token.basic_fields(4) == ["名詞"]


def test_add_chunk_continues_after_previous_chunk() -> None:
    sentence = Sentence()
    for surface in "abc":
        sentence.add_token(Token.from_feature(surface, "名詞,一般"))
    first = sentence.add_chunk(2)
    second = sentence.add_chunk(1, link=-1, score=0.5)

    assert (first.token_pos, first.token_end) == (0, 2)
    assert (second.token_pos, second.token_end) == (2, 3)
    assert [t.surface for t in sentence.chunk_tokens(second)] == ["c"]


@pytest.mark.parametrize("value, expected", [("ipa", PosSet.IPA), ("JUMAN", PosSet.JUMAN), (2, PosSet.UNIDIC)])
def test_posset_parse(value, expected) -> None:
    assert PosSet.parse(value) == expected


@pytest.mark.parametrize("value", ["chasen", 7])
def test_posset_parse_unknown(value) -> None:
    with pytest.raises(ConfigurationError):
        PosSet.parse(value)
