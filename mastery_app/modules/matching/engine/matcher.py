"""
Answer Matcher.
Pure logic, no session state.

Judges a free-text answer against every accepted variant of a card with
a three-tier policy: exact → containment → fuzzy.  The verdict is a
plain OR of the tiers; the order only decides which tier is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from mastery_app.core.config import Config
from ..logics.algorithms import normalize, similarity

if TYPE_CHECKING:
    from mastery_app.modules.cards.schemas import Card

TIER_EXACT = 'exact'
TIER_CONTAINMENT = 'containment'
TIER_FUZZY = 'fuzzy'


@dataclass(frozen=True)
class MatchResult:
    is_correct: bool
    tier: Optional[str] = None              # 'exact' | 'containment' | 'fuzzy' | None
    matched_variant: Optional[str] = None
    score: float = 0.0                      # best similarity seen


class AnswerMatcher:
    """
    Configurable matcher.

    ``threshold`` is compared strictly (``>``) unless ``inclusive`` is set:
    with the default 0.8 a single typo in a five-letter word scores exactly
    0.8 and is rejected.
    """

    def __init__(
        self,
        threshold: Optional[float] = None,
        inclusive: Optional[bool] = None,
        allow_containment: Optional[bool] = None,
    ):
        self.threshold = Config.get('SIMILARITY_THRESHOLD') if threshold is None else threshold
        self.inclusive = Config.get('SIMILARITY_INCLUSIVE') if inclusive is None else inclusive
        self.allow_containment = (
            Config.get('ALLOW_CONTAINMENT') if allow_containment is None else allow_containment
        )

    def _passes(self, score: float) -> bool:
        return score >= self.threshold if self.inclusive else score > self.threshold

    def match(self, user_input: Optional[str], card: 'Card') -> MatchResult:
        """Grade *user_input* against ``card.accepted_answers``."""
        given = normalize(user_input)
        variants = [normalize(v) for v in card.accepted_answers] or [normalize(card.answer)]

        # 1. Exact
        for variant in variants:
            if given == variant:
                return MatchResult(True, TIER_EXACT, variant, 1.0)

        # 2. Containment (both sides non-empty)
        if self.allow_containment and given:
            for variant in variants:
                if variant and (given in variant or variant in given):
                    return MatchResult(True, TIER_CONTAINMENT, variant, similarity(given, variant))

        # 3. Fuzzy
        best_score, best_variant = 0.0, None
        for variant in variants:
            score = similarity(given, variant)
            if score > best_score:
                best_score, best_variant = score, variant
        if best_variant is not None and self._passes(best_score):
            return MatchResult(True, TIER_FUZZY, best_variant, best_score)

        return MatchResult(False, None, None, best_score)

    @staticmethod
    def exact_match(user_input: Optional[str], card: 'Card') -> MatchResult:
        """Normalized equality only (spelling and scramble drills)."""
        given = normalize(user_input)
        for variant in card.accepted_answers or (normalize(card.answer),):
            if given and given == normalize(variant):
                return MatchResult(True, TIER_EXACT, variant, 1.0)
        return MatchResult(False)


def is_acceptable(user_input: Optional[str], card: 'Card') -> bool:
    """Module-level shortcut using the configured defaults."""
    return AnswerMatcher().match(user_input, card).is_correct
