"""
Distractor Selector for option and statement generation.
================================================
Picks plausible wrong answers for a target card.

Pipeline:
    1. Candidate pool = every card except the target.
    2. Sanitize - cards whose normalized answer equals the target's are
       set aside so an option never repeats the correct text.
    3. Uniform sampling without replacement, topping up from the
       set-aside cards only when the sanitized pool runs short.
    4. Merge with the target and shuffle.

Pure logic, no session state.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Tuple

from mastery_app.core.config import Config
from mastery_app.core.errors import InsufficientPoolError
from mastery_app.modules.cards.schemas import Card
from mastery_app.modules.matching.logics.algorithms import normalize


@dataclass(frozen=True)
class Statement:
    """A true/false claim: "``target.prompt`` means ``shown_answer``"."""

    card_id: Hashable
    shown_answer: str
    is_true: bool
    decoy_id: Optional[Hashable] = None


class DistractorSelector:
    """Selects wrong options for multiple-choice and true/false prompts."""

    @classmethod
    def _split_candidates(cls, pool: Iterable[Card], target: Card) -> Tuple[List[Card], List[Card]]:
        """Return (distinct-answer candidates, same-answer candidates), excluding the target."""
        target_answer = normalize(target.answer)
        distinct, same_text = [], []
        for card in pool:
            if card.id == target.id:
                continue
            if normalize(card.answer) == target_answer:
                same_text.append(card)
            else:
                distinct.append(card)
        return distinct, same_text

    @classmethod
    def pick_distractors(
        cls,
        pool: Iterable[Card],
        target: Card,
        count: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> List[Card]:
        """
        Build a shuffled option list containing *target* exactly once.

        Returns ``min(count, len(pool) - 1) + 1`` cards.

        Raises:
            InsufficientPoolError: If the pool holds fewer than two cards.
        """
        rng = rng or random
        cards = list(pool)
        if len(cards) < 2:
            raise InsufficientPoolError(len(cards))
        if count is None:
            count = Config.get('DEFAULT_DISTRACTOR_COUNT')

        distinct, same_text = cls._split_candidates(cards, target)
        needed = max(0, min(count, len(distinct) + len(same_text)))

        chosen = rng.sample(distinct, min(needed, len(distinct)))
        shortfall = needed - len(chosen)
        if shortfall > 0:
            chosen.extend(rng.sample(same_text, shortfall))

        options = chosen + [target]
        rng.shuffle(options)
        return options

    @classmethod
    def pick_decoy(
        cls,
        pool: Iterable[Card],
        target: Card,
        rng: Optional[random.Random] = None,
    ) -> Card:
        """
        One card other than *target*, preferring a different answer text.

        Raises:
            InsufficientPoolError: If no other card exists.
        """
        rng = rng or random
        cards = list(pool)
        distinct, same_text = cls._split_candidates(cards, target)
        candidates = distinct or same_text
        if not candidates:
            raise InsufficientPoolError(len(cards))
        return rng.choice(candidates)

    @classmethod
    def build_statement(
        cls,
        pool: Iterable[Card],
        target: Card,
        rng: Optional[random.Random] = None,
        true_ratio: Optional[float] = None,
    ) -> Statement:
        """
        Synthesize a true/false statement for *target*.

        A false statement shows a decoy's answer.  When every other card
        shares the target's answer text the statement is made true, since
        showing that text would not actually be false.
        """
        rng = rng or random
        if true_ratio is None:
            true_ratio = Config.get('STATEMENT_TRUE_RATIO')

        cards = list(pool)
        if len(cards) < 2:
            raise InsufficientPoolError(len(cards))

        if rng.random() < true_ratio:
            return Statement(card_id=target.id, shown_answer=target.answer, is_true=True)

        distinct, _ = cls._split_candidates(cards, target)
        if not distinct:
            return Statement(card_id=target.id, shown_answer=target.answer, is_true=True)

        decoy = rng.choice(distinct)
        return Statement(card_id=target.id, shown_answer=decoy.answer, is_true=False, decoy_id=decoy.id)


# Function aliases
pick_distractors = DistractorSelector.pick_distractors
pick_decoy = DistractorSelector.pick_decoy
build_statement = DistractorSelector.build_statement
