# File: mastery_app/modules/modes/base_mode.py
"""
Base Study Mode
===============
Abstract contract for the evaluators a stage can use (multiple choice,
true/false statement, typed recall, exact spelling, self-rating).

A *Mode* is responsible for two things:

1. **Formatting** a card into the extra prompt fields its stage needs
   (options, a statement, a hint).
2. **Evaluating** the learner's submission against that interaction.

Modes are **stateless** – all context is passed via arguments.
This makes them trivially testable and hot-swappable at runtime.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from mastery_app.modules.cards.engine.card_pool import CardPool
from mastery_app.modules.cards.schemas import Card


# ── DTOs specific to mode evaluation ────────────────────────────────


@dataclass
class EvaluationResult:
    """
    Outcome produced by ``BaseStudyMode.evaluate_submission``.

    ``match_tier`` is only set by text evaluators
    (``'exact'`` / ``'containment'`` / ``'fuzzy'``).
    """

    is_correct: bool
    match_tier: Optional[str] = None
    feedback: Dict[str, Any] = field(default_factory=dict)


# ── Abstract Mode ────────────────────────────────────────────────────


class BaseStudyMode(ABC):
    """
    Contract for stage evaluators.

    Subclass checklist:
    * Implement ``get_mode_id``, ``format_interaction``, ``evaluate_submission``.
    * Never raise on bad learner input – judge it incorrect instead.
    """

    #: Smallest deck this mode can run on.
    min_cards: int = 1

    @abstractmethod
    def get_mode_id(self) -> str:
        """
        Return the unique identifier for this mode.

        Matches an ``EvaluatorKind`` value, e.g. ``'choice'``, ``'typed'``.
        """
        ...

    @abstractmethod
    def format_interaction(
        self,
        card: Card,
        pool: CardPool,
        settings: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ) -> Dict[str, Any]:
        """
        Build the mode-specific part of a prompt.

        Args:
            card:     The card being asked.
            pool:     Full card pool – needed by modes that generate
                      distractors.
            settings: Mode settings (``distractor_count`` …).
            rng:      Random source for anything generated.

        Returns:
            A dict merged into the ``Prompt`` (keys ``options``,
            ``statement``, ``hint`` as relevant).
        """
        ...

    @abstractmethod
    def evaluate_submission(
        self,
        card: Card,
        user_input: Any,
        interaction: Dict[str, Any],
    ) -> EvaluationResult:
        """
        Grade the learner's answer.

        Args:
            card:        The card that was asked.
            user_input:  Raw submission (``int`` option index, ``bool``,
                         or ``str`` depending on the mode).
            interaction: The dict ``format_interaction`` returned for
                         this prompt.
        """
        ...
