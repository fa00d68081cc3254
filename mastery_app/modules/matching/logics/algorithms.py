"""
Pure logic for answer checking - Algorithms and Pure Functions.
No engine state, no I/O.
"""

from typing import Optional


def normalize(text: Optional[str]) -> str:
    """Lowercase, trim and collapse internal whitespace. Idempotent."""
    if not text:
        return ''
    return ' '.join(str(text).lower().split())


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance (insert / delete / substitute, all cost 1)."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,          # deletion
                current[j - 1] + 1,       # insertion
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    ``1 - distance / max(len(a), len(b))`` in ``[0.0, 1.0]``.

    Two empty strings are defined as identical (1.0).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest
