"""
Exact Mode
==========
Spelling and scramble drills: the answer must match an accepted variant
exactly (case and surrounding whitespace ignored).  The prompt carries
the answer's letters scrambled as tiles.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from mastery_app.modules.matching.engine.matcher import AnswerMatcher
from .base_mode import BaseStudyMode, EvaluationResult

_MAX_SCRAMBLE_TRIES = 10


def scramble_letters(text: str, rng: Optional[random.Random] = None) -> List[str]:
    """Shuffle the characters of *text*, retrying so the result differs when it can."""
    rng = rng or random
    letters = list(text)
    scrambled = letters[:]
    for _ in range(_MAX_SCRAMBLE_TRIES):
        rng.shuffle(scrambled)
        if scrambled != letters:
            break
    return scrambled


class ExactMode(BaseStudyMode):

    def get_mode_id(self) -> str:
        return 'exact'

    def format_interaction(self, card, pool, settings=None, rng=None) -> Dict[str, Any]:
        return {'hint': {'length': len(card.answer), 'letters': scramble_letters(card.answer, rng)}}

    def evaluate_submission(self, card, user_input: Any, interaction: Dict[str, Any]) -> EvaluationResult:
        text = user_input if isinstance(user_input, str) else ''
        result = AnswerMatcher.exact_match(text, card)
        return EvaluationResult(
            is_correct=result.is_correct,
            match_tier=result.tier,
            feedback={'user_text': user_input},
        )
