"""
Choice Mode
===========
Multiple-choice presentation: the learner picks the card's answer among
distractors drawn from the rest of the deck.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mastery_app.core.config import Config
from mastery_app.modules.distractors.engine.selector import DistractorSelector
from .base_mode import BaseStudyMode, EvaluationResult


class ChoiceMode(BaseStudyMode):
    """
    ``format_interaction`` returns ``options`` (cards, target included once).
    ``evaluate_submission`` expects the index of the chosen option.
    """

    min_cards = 2

    def get_mode_id(self) -> str:
        return 'choice'

    def format_interaction(self, card, pool, settings=None, rng=None) -> Dict[str, Any]:
        settings = settings or {}
        count = settings.get('distractor_count')
        if count is None:
            count = Config.get('DEFAULT_DISTRACTOR_COUNT')

        options = DistractorSelector.pick_distractors(pool, card, count=count, rng=rng)
        return {
            'options': options,
            'correct_index': next(i for i, option in enumerate(options) if option.id == card.id),
        }

    def evaluate_submission(self, card, user_input: Any, interaction: Dict[str, Any]) -> EvaluationResult:
        options = interaction.get('options') or []
        chosen: Optional[int] = None

        # bool is an int subclass; a True/False click is not an option index
        if isinstance(user_input, int) and not isinstance(user_input, bool):
            if 0 <= user_input < len(options):
                chosen = user_input

        is_correct = chosen is not None and options[chosen].id == card.id
        return EvaluationResult(
            is_correct=is_correct,
            feedback={
                'correct_index': interaction.get('correct_index'),
                'selected_index': chosen,
            },
        )
