"""
Per-language canonical form for comparing spoken and expected text.

The form is deliberately lossy: case, accents and punctuation are dropped so
that scoring reflects what was said rather than how it was transcribed.
"""
import unicodedata
from typing import Optional

COMBINING_MARKS_START = 0x0300
COMBINING_MARKS_END = 0x036F

# Letters typed interchangeably in a given language. Russian "ё" needs no
# entry: NFKD splits off its diaeresis and the mark is stripped.
LANGUAGE_FOLDS: dict[str, dict[str, str]] = {
    "tr": {"ı": "i"},
}


def primary_language(language: Optional[str]) -> str:
    """Reduce a language hint like 'ru-RU' or 'tr_TR' to 'ru' / 'tr'."""
    if not language:
        return ""
    return language.strip().lower().replace("_", "-").split("-")[0]


def _is_combining_mark(char: str) -> bool:
    return COMBINING_MARKS_START <= ord(char) <= COMBINING_MARKS_END


def _is_punctuation_or_symbol(char: str) -> bool:
    return unicodedata.category(char)[0] in ("P", "S")


def normalize(text: Optional[str], language: Optional[str] = None) -> str:
    """
    Normalize text for fuzzy comparison.

    Lowercases, removes accents, punctuation and symbols, applies the
    language's letter folding and collapses whitespace. Missing text is
    treated as empty. Applying it twice gives the same result as once.
    """
    if text is None:
        return ""

    # Compatibility decomposition can surface capitals (e.g. "ℌ" -> "H") and
    # lowercasing can surface precomposed letters, so decompose on both sides
    decomposed = unicodedata.normalize("NFKD", unicodedata.normalize("NFKD", text.strip()).lower())
    stripped = "".join(
        c for c in decomposed
        if not _is_combining_mark(c) and not _is_punctuation_or_symbol(c)
    )
    # Dropping a character can leave combining marks adjacent; reorder them now
    stripped = unicodedata.normalize("NFKD", stripped)

    for source, target in LANGUAGE_FOLDS.get(primary_language(language), {}).items():
        stripped = stripped.replace(source, target)

    return " ".join(stripped.split())
