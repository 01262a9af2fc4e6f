def levenshtein(a: str, b: str) -> int:
    """
    Levenshtein distance between two strings, counted in code points.

    Insertions, deletions and substitutions each cost 1. Only two rows of
    the dynamic-programming table are kept.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous = current

    return previous[-1]
