"""
Spell Mode
==========
Spelling drill: the learner produces the whole answer from the prompt
alone.  Graded like ``ExactMode``, but the hint carries only the answer
length and a shortened clue, never the letters themselves.
"""

from __future__ import annotations

from typing import Any, Dict

from .exact_mode import ExactMode

CLUE_LENGTH = 100


class SpellMode(ExactMode):

    def get_mode_id(self) -> str:
        return 'spelled'

    def format_interaction(self, card, pool, settings=None, rng=None) -> Dict[str, Any]:
        clue = card.prompt[:CLUE_LENGTH]
        if len(card.prompt) > CLUE_LENGTH:
            clue += '...'
        return {'hint': {'length': len(card.answer), 'clue': clue}}
