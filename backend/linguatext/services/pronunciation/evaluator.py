"""
Pronunciation scoring: how close a speech-to-text hypothesis is to the
sentence or word the learner was asked to say.
"""
from dataclasses import dataclass
from typing import Optional

from linguatext.errors import InvalidInput
from linguatext.services.pronunciation.edit_distance import levenshtein
from linguatext.services.pronunciation.normalizer import normalize

DEFAULT_THRESHOLD = 0.8


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of a single pronunciation check."""
    similarity: float  # 1.0 means identical after normalization
    correct: bool
    distance: int
    normalized_target: str
    normalized_hypothesis: str
    threshold: float


def similarity_ratio(distance: int, a: str, b: str) -> float:
    """Convert an edit distance into a similarity in [0, 1]."""
    max_len = max(len(a), len(b), 1)
    return 1 - distance / max_len


def evaluate(
    target: Optional[str],
    hypothesis: Optional[str],
    language: Optional[str] = "en",
    threshold: float = DEFAULT_THRESHOLD,
) -> EvaluationResult:
    """
    Score a hypothesis against the expected text.

    Args:
        target: What the learner was supposed to say
        hypothesis: What the speech-to-text engine heard
        language: Language hint for normalization (e.g. "en", "ru", "tr")
        threshold: Minimum similarity that counts as correct (inclusive)

    Returns:
        EvaluationResult; empty or missing strings score normally and
        two empty strings are a perfect match

    Raises:
        InvalidInput: If threshold is outside [0, 1]
    """
    if isinstance(threshold, bool) or not 0.0 <= threshold <= 1.0:
        raise InvalidInput(f"threshold must be between 0 and 1, got {threshold!r}")

    norm_target = normalize(target, language)
    norm_hypothesis = normalize(hypothesis, language)

    distance = levenshtein(norm_target, norm_hypothesis)
    similarity = similarity_ratio(distance, norm_target, norm_hypothesis)

    return EvaluationResult(
        similarity=similarity,
        correct=similarity >= threshold,
        distance=distance,
        normalized_target=norm_target,
        normalized_hypothesis=norm_hypothesis,
        threshold=threshold,
    )
