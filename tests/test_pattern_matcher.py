import logging

import pytest

from chunksel.errors import PatternCompileError
from chunksel.preprocessing.charset import CharsetNormalizer
from chunksel.rules.pattern_matcher import PatternMatcher


def test_compile_alternatives_keep_declaration_order() -> None:
    matcher = PatternMatcher()

    assert matcher.compile("(a|b|c)")
    assert matcher.patterns == ("a", "b", "c")


def test_compile_single_literal() -> None:
    matcher = PatternMatcher()

    assert matcher.compile("a")
    assert matcher.patterns == ("a",)


@pytest.mark.parametrize("spec", ["()", "(|)", "(||)", ""])
def test_compile_without_alternatives_fails(spec: str) -> None:
    matcher = PatternMatcher()

    assert not matcher.compile(spec)
    assert len(matcher) == 0


def test_compile_drops_empty_alternatives() -> None:
    matcher = PatternMatcher()

    assert matcher.compile("(a||b|)")
    assert matcher.patterns == ("a", "b")


def test_unbalanced_parenthesis_is_a_literal() -> None:
    matcher = PatternMatcher()

    assert matcher.compile("(a|b")
    assert matcher.patterns == ("(a|b",)


def test_recompile_replaces_previous_alternatives() -> None:
    matcher = PatternMatcher()
    matcher.compile("(a|b)")

    assert matcher.compile("(c|d)")
    assert matcher.patterns == ("c", "d")
    assert not matcher.compile("()")
    assert matcher.patterns == ()


def test_compile_rejects_oversized_pattern() -> None:
    matcher = PatternMatcher(max_pattern_length=16)

    with pytest.raises(PatternCompileError):
        matcher.compile("(" + "|".join("abcdefgh") + ")")


def test_compile_rejects_too_many_alternatives() -> None:
    matcher = PatternMatcher(max_alternatives=3)

    with pytest.raises(PatternCompileError):
        matcher.compile("(a|b|c|d)")


def test_match_is_exact_and_ordered() -> None:
    matcher = PatternMatcher()
    matcher.compile("(、|。|，)")

    assert matcher.match("。") == "。"
    assert matcher.match("。。") is None
    assert matcher.match("") is None
    assert matcher.match(None) is None


def test_prefix_match_returns_first_declared_prefix() -> None:
    matcher = PatternMatcher()
    matcher.compile("(助詞|助詞,格助詞)")

    assert matcher.prefix_match("助詞,格助詞,一般,*") == "助詞"
    assert matcher.prefix_match("助動詞,*,*,*") is None


def test_prefix_match_never_longer_than_candidate() -> None:
    matcher = PatternMatcher()
    matcher.compile("(名詞,接尾|名詞)")

    assert matcher.prefix_match("名詞") == "名詞"
    assert matcher.prefix_match("名") is None
    assert matcher.prefix_match(None) is None


def test_failed_conversion_is_logged_and_tolerated(caplog) -> None:
    matcher = PatternMatcher()

    with caplog.at_level(logging.WARNING, logger="chunksel.rules.pattern_matcher"):
        assert matcher.compile("(、|。)", CharsetNormalizer("ASCII"))

    assert matcher.patterns == ("、", "。")
    assert "cannot convert" in caplog.text


def test_conversion_into_japanese_charset() -> None:
    matcher = PatternMatcher()

    assert matcher.compile("(助詞|助動詞)", CharsetNormalizer("EUC-JP"))
    assert matcher.patterns == ("助詞", "助動詞")
