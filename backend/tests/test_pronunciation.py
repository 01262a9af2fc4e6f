"""Tests for text normalization, edit distance and pronunciation scoring."""
import random
import pytest

from linguatext.errors import InvalidInput
from linguatext.services.pronunciation import evaluate, levenshtein, normalize
from linguatext.services.pronunciation.normalizer import primary_language


class TestNormalize:
    """Tests for per-language canonicalization."""

    def test_case_and_punctuation(self):
        assert normalize("Hello, World!", "en") == "hello world"

    def test_accents_removed(self):
        assert normalize("  Café   crème brûlée ", "fr") == "cafe creme brulee"

    def test_symbols_removed(self):
        assert normalize("5 $ + 3 = 8", "en") == "5 3 8"

    def test_uzbek_apostrophes_dropped(self):
        assert normalize("O‘zbekiston", "uz") == "ozbekiston"
        assert normalize("o'zbek", "uz") == "ozbek"

    def test_russian_yo_folded(self):
        assert normalize("Ёлка", "ru") == "елка"
        assert normalize("ёж", "ru-RU") == "еж"

    def test_turkish_dotless_i_folded(self):
        assert normalize("Kırmızı", "tr") == "kirmizi"

    def test_dotless_i_kept_for_other_languages(self):
        assert normalize("Kırmızı", "en") == "kırmızı"

    def test_dotted_capital_i(self):
        assert normalize("İstanbul", "tr") == "istanbul"

    def test_compatibility_characters(self):
        assert normalize("ℌello ﬁne", "en") == "hello fine"

    def test_whitespace_collapsed_and_trimmed(self):
        assert normalize("hello !  world ?", "en") == "hello world"

    def test_none_is_empty(self):
        assert normalize(None, "en") == ""

    def test_missing_language(self):
        assert normalize("Ёж", None) == "еж"

    @pytest.mark.parametrize("language", ["en", "ru", "tr"])
    def test_idempotent_when_symbol_separates_marks(self, language):
        for text in ["᪰↹♲्", "ࣗ֏⃬"]:
            once = normalize(text, language)
            assert normalize(once, language) == once

    @pytest.mark.parametrize("language", ["en", "ru", "tr", "uz", None])
    def test_idempotent(self, language):
        """Normalizing twice changes nothing, across a wide range of code points."""
        rng = random.Random(1234)
        for _ in range(20000):
            text = "".join(chr(rng.randint(0x20, 0x2FFF)) for _ in range(rng.randint(0, 6)))
            once = normalize(text, language)
            assert normalize(once, language) == once, repr(text)

    def test_primary_language(self):
        assert primary_language("ru-RU") == "ru"
        assert primary_language("TR_tr") == "tr"
        assert primary_language(None) == ""


class TestLevenshtein:
    """Tests for the edit distance."""

    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_empty_strings(self):
        assert levenshtein("", "") == 0
        assert levenshtein("", "abc") == 3
        assert levenshtein("abcd", "") == 4

    def test_single_operations(self):
        assert levenshtein("cat", "cats") == 1
        assert levenshtein("cats", "cat") == 1
        assert levenshtein("cat", "cut") == 1

    def test_code_points(self):
        assert levenshtein("é", "e") == 1
        assert levenshtein("салом", "салам") == 1

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("flaw", "lawn"),
        ("", "hello"),
        ("intention", "execution"),
        ("abc", "cba"),
    ])
    def test_symmetric(self, a, b):
        assert levenshtein(a, b) == levenshtein(b, a)

    @pytest.mark.parametrize("a", ["", "a", "hello world", "ёлка"])
    def test_identity(self, a):
        assert levenshtein(a, a) == 0

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("", "hello"),
        ("abc", "xyz"),
        ("short", "a much longer string"),
    ])
    def test_bounded_by_longer_length(self, a, b):
        distance = levenshtein(a, b)
        assert abs(len(a) - len(b)) <= distance <= max(len(a), len(b))


class TestEvaluate:
    """Tests for pronunciation scoring."""

    def test_exact_match(self):
        result = evaluate("hello world", "hello world", "en")
        assert result.correct is True
        assert result.similarity == 1.0

    def test_case_and_punctuation_ignored(self):
        result = evaluate("Hello, World!", "hello world", "en")
        assert result.similarity == 1.0
        assert result.distance == 0

    def test_both_empty_is_perfect(self):
        result = evaluate("", "", "en")
        assert result.similarity == 1.0
        assert result.correct is True

    def test_missing_hypothesis_scores_zero(self):
        result = evaluate("hello", None, "en")
        assert result.similarity == 0.0
        assert result.correct is False
        assert result.normalized_hypothesis == ""

    def test_threshold_is_inclusive(self):
        result = evaluate("abcde", "abcdx", "en", threshold=0.8)
        assert result.similarity == 0.8
        assert result.correct is True

    def test_just_below_threshold(self):
        result = evaluate("abcde", "abcdx", "en", threshold=0.81)
        assert result.correct is False

    def test_default_threshold(self):
        assert evaluate("abcde", "abcdx").threshold == 0.8

    def test_longer_hypothesis_uses_longer_length(self):
        result = evaluate("cat", "cats and dogs", "en")
        assert result.distance == 10
        assert result.similarity == pytest.approx(1 - 10 / 13)

    def test_language_folding_applies(self):
        assert evaluate("ёлка", "елка", "ru").similarity == 1.0
        assert evaluate("kırmızı", "kirmizi", "tr").similarity == 1.0

    def test_result_echoes_normalized_text(self):
        result = evaluate("Good morning!", "good mourning", "en")
        assert result.normalized_target == "good morning"
        assert result.normalized_hypothesis == "good mourning"
        assert result.distance == 1

    @pytest.mark.parametrize("target,hypothesis", [
        ("hello", "world"),
        ("", "something"),
        ("a", "completely different"),
        ("Salom dunyo", "salom"),
    ])
    def test_similarity_within_unit_interval(self, target, hypothesis):
        result = evaluate(target, hypothesis, "en")
        assert 0.0 <= result.similarity <= 1.0

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(InvalidInput):
            evaluate("hello", "hello", "en", threshold=threshold)
