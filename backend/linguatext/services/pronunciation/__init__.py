from linguatext.services.pronunciation.normalizer import normalize
from linguatext.services.pronunciation.edit_distance import levenshtein
from linguatext.services.pronunciation.evaluator import (
    DEFAULT_THRESHOLD,
    EvaluationResult,
    evaluate,
)

__all__ = [
    "normalize",
    "levenshtein",
    "DEFAULT_THRESHOLD",
    "EvaluationResult",
    "evaluate",
]
