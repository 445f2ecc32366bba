"""
Unit tests for text normalization and the offline language guess.
"""

import pytest

from langfilter import (
    UNDETERMINED,
    guess_language_family,
    has_enough_signal,
    is_home_guess,
    normalize,
    primary_subtag,
)


class TestNormalize:
    """Tests for normalize."""

    def test_strips_punctuation_and_digits(self) -> None:
        assert normalize("héllo, world!!") == "héllo world"

    def test_collapses_whitespace(self) -> None:
        assert normalize("  dzień \t\n  dobry  ") == "dzień dobry"

    def test_drops_emoji_and_numbers(self) -> None:
        assert normalize("100% 🔥🔥 привет 2024") == "привет"

    @pytest.mark.parametrize("text", [
        "héllo, world!!",
        "a ! b",
        "  x1y2 -- z  ",
        "日本語のテキスト、です。",
        "",
    ])
    def test_idempotent(self, text: str) -> None:
        once = normalize(text)
        assert normalize(once) == once


class TestSignalGate:
    """Tests for has_enough_signal."""

    def test_below_minimum(self) -> None:
        assert not has_enough_signal("abc")

    def test_at_minimum(self) -> None:
        assert has_enough_signal("abcd")

    def test_custom_minimum(self) -> None:
        assert not has_enough_signal("abcd", min_length=5)


class TestPrimarySubtag:
    """Tests for primary_subtag."""

    @pytest.mark.parametrize("code,expected", [
        ("PL", "pl"),
        ("pt-BR", "pt"),
        ("zh_CN", "zh"),
        (" en ", "en"),
    ])
    def test_primary_subtag(self, code: str, expected: str) -> None:
        assert primary_subtag(code) == expected


class TestGuessLanguageFamily:
    """Tests for guess_language_family (offline, langdetect)."""

    def test_english(self) -> None:
        assert guess_language_family("this is a simple english sentence about the weather today") == "en"

    def test_spanish(self) -> None:
        assert guess_language_family("hola a todos como estan hoy que tengan un buen dia") == "es"

    def test_no_letters_is_undetermined(self) -> None:
        assert guess_language_family("") == UNDETERMINED

    @pytest.mark.parametrize("word", ["danke", "Dziękuję", "merci", "spasibo"])
    def test_short_text_is_undetermined(self, word: str) -> None:
        assert guess_language_family(normalize(word)) == UNDETERMINED

    def test_custom_min_length(self) -> None:
        assert guess_language_family("danke", min_length=20) == UNDETERMINED
        assert guess_language_family("hola a todos como estan hoy que tengan un buen dia", min_length=5) == "es"


class TestIsHomeGuess:
    """Tests for is_home_guess."""

    def test_home_languages(self) -> None:
        assert is_home_guess("en", ["en", "es"])
        assert is_home_guess("es", ["en", "es"])

    def test_undetermined_counts_as_home(self) -> None:
        assert is_home_guess(UNDETERMINED, ["en", "es"])

    def test_other_language(self) -> None:
        assert not is_home_guess("pl", ["en", "es"])
        assert not is_home_guess("zh-cn", ["en", "es"])
