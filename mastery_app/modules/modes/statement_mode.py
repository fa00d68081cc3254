"""
Statement Mode
==============
True/false judgment: the prompt is paired with either its own answer or
a decoy's, and the learner says whether the pairing is right.
"""

from __future__ import annotations

from typing import Any, Dict

from mastery_app.modules.distractors.engine.selector import DistractorSelector
from .base_mode import BaseStudyMode, EvaluationResult


class StatementMode(BaseStudyMode):

    min_cards = 2

    def get_mode_id(self) -> str:
        return 'statement'

    def format_interaction(self, card, pool, settings=None, rng=None) -> Dict[str, Any]:
        settings = settings or {}
        statement = DistractorSelector.build_statement(
            pool, card, rng=rng, true_ratio=settings.get('true_ratio'),
        )
        return {'statement': statement}

    def evaluate_submission(self, card, user_input: Any, interaction: Dict[str, Any]) -> EvaluationResult:
        statement = interaction['statement']
        is_correct = isinstance(user_input, bool) and user_input == statement.is_true
        return EvaluationResult(
            is_correct=is_correct,
            feedback={
                'statement_was_true': statement.is_true,
                'shown_answer': statement.shown_answer,
            },
        )
