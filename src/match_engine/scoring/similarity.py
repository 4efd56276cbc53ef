"""String similarity primitives for the ``_sim`` operator.

Two independent metrics are computed and the larger one wins, so a pair
that scores poorly under edit distance (e.g. transposed tokens) can still
score well under Jaro, and vice versa. Both are case-sensitive.
"""

from __future__ import annotations


def levenshtein_distance(s1: str, s2: str) -> int:
    """Minimum number of single-character edits turning ``s1`` into ``s2``.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Shorter string as columns, two rows at a time
    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)
    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)

    for j in range(1, n + 1):
        curr_row[0] = j
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            curr_row[i] = min(
                prev_row[i] + 1,  # deletion
                curr_row[i - 1] + 1,  # insertion
                prev_row[i - 1] + cost,  # substitution
            )
        prev_row, curr_row = curr_row, prev_row

    return prev_row[m]


def jaro_similarity(s1: str, s2: str) -> float:
    """Jaro similarity in [0, 1]; 1 for identical non-empty strings."""
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    len1, len2 = len(s1), len(s2)
    window = max(max(len1, len2) // 2 - 1, 0)

    matched1 = [False] * len1
    matched2 = [False] * len2
    matches = 0
    for i, ch in enumerate(s1):
        lo = max(0, i - window)
        hi = min(i + window + 1, len2)
        for j in range(lo, hi):
            if not matched2[j] and s2[j] == ch:
                matched1[i] = matched2[j] = True
                matches += 1
                break

    if matches == 0:
        return 0.0

    transpositions = 0
    j = 0
    for i in range(len1):
        if not matched1[i]:
            continue
        while not matched2[j]:
            j += 1
        if s1[i] != s2[j]:
            transpositions += 1
        j += 1

    m = float(matches)
    return (m / len1 + m / len2 + (m - transpositions / 2) / m) / 3.0


def string_sim(a: str, b: str) -> float:
    """Permissive similarity: the better of normalized edit similarity and Jaro.

    Two empty strings are a non-match (0), not a perfect match.
    """
    if a == "" and b == "":
        return 0.0
    edit = 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))
    return max(edit, jaro_similarity(a, b))
