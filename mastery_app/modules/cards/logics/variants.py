"""
Pure logic for accepted-answer variants.
No engine state, no I/O.

Chinese cards carry a phonetic reading (pinyin) and a translation next
to the main answer.  Every literal form a learner may legitimately type
is folded into one ordered set here, so the matcher never needs to know
which script it is looking at.
"""

from typing import Iterable, List, Optional, Tuple

from mastery_app.modules.matching.logics.algorithms import normalize


def build_accepted_answers(
    answer: str,
    phonetic: Optional[str] = None,
    translation: Optional[str] = None,
    extra: Iterable[str] = (),
) -> Tuple[str, ...]:
    """
    Build the normalized, de-duplicated variant tuple for one card.

    Order: answer, translation only, phonetic only, phonetic + translation
    combinations, then explicit extras.
    """
    candidates: List[str] = [answer]

    if translation:
        candidates.append(translation)
    if phonetic:
        candidates.append(phonetic)
    if phonetic and translation:
        candidates.append(f"{phonetic} {translation}")
        candidates.append(f"{translation} {phonetic}")
        candidates.append(f"{phonetic} ({translation})")

    candidates.extend(extra)

    variants: List[str] = []
    seen = set()
    for candidate in candidates:
        norm = normalize(candidate)
        if norm and norm not in seen:
            seen.add(norm)
            variants.append(norm)
    return tuple(variants)
