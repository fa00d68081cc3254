"""
Round Controller
================
Finite-state machine that owns one ``ScheduleQueue`` per stage of the
plan plus the mastered set, and moves cards between them.

Transition table (per card)::

    stage N   + correct    →  stage N+1 (or Mastered after the last stage)
    stage N   + incorrect  →  tail of stage N again

Selection policy: always the front of the *current* stage's queue.  The
served card stays in its queue until a verdict arrives, so the sizes of
all queues plus the mastered set add up to the deck size at every
observable point.  When the current queue runs dry the controller moves
to the next non-empty one (a *round transition*), shuffling it once.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence

from mastery_app.core.errors import NoActiveCardError, SchedulerStateError
from ..schemas import EvaluatorKind, RoundEvent, Stage, StagePlan, Transition, resolve_plan
from .queue import ScheduleQueue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledCard:
    """The card currently awaiting an answer."""

    card_id: Hashable
    stage: Stage
    evaluator: EvaluatorKind
    round_number: int
    round_event: Optional[RoundEvent] = None   # set when this pick crossed into a new stage


class RoundController:

    def __init__(
        self,
        card_ids: Sequence[Hashable],
        plan: StagePlan,
        first_stage: Optional[Stage] = None,
        rng: Optional[random.Random] = None,
        shuffle: bool = True,
    ):
        self._plan = resolve_plan(plan, first_stage)
        self._stages: List[Stage] = [stage for stage, _ in self._plan]
        self._evaluators: Dict[Stage, EvaluatorKind] = dict(self._plan)
        self._rng = rng or random
        self._shuffle = shuffle

        self._all_ids = list(card_ids)
        if len(set(self._all_ids)) != len(self._all_ids):
            raise ValueError('Card ids must be unique')

        self._queues: Dict[Stage, ScheduleQueue] = {stage: ScheduleQueue() for stage in self._stages}
        first_queue = ScheduleQueue(self._all_ids)
        if shuffle:
            first_queue.shuffle(self._rng)
        self._queues[self._stages[0]] = first_queue

        self._mastered: List[Hashable] = []
        self._mastered_set = set()
        self._current = 0
        self._round_number = 1
        self._active: Optional[ScheduledCard] = None
        self.round_events: List[RoundEvent] = []

    # ── selection ────────────────────────────────────────────────────

    def next_card(self) -> Optional[ScheduledCard]:
        """
        Return the card to present, or ``None`` once everything is mastered.

        Calling again before ``apply_verdict`` returns the same card.
        """
        if self._active is not None:
            return self._active

        round_event = None
        while True:
            stage = self._stages[self._current]
            queue = self._queues[stage]
            if not queue.is_empty():
                self._active = ScheduledCard(
                    card_id=queue.peek_front(),
                    stage=stage,
                    evaluator=self._evaluators[stage],
                    round_number=self._round_number,
                    round_event=round_event,
                )
                return self._active

            following = self._next_non_empty(self._current + 1)
            if following is None:
                return None
            round_event = self._transition_to(following)

    def _next_non_empty(self, start: int) -> Optional[int]:
        for idx in range(start, len(self._stages)):
            if not self._queues[self._stages[idx]].is_empty():
                return idx
        return None

    def _transition_to(self, idx: int) -> RoundEvent:
        from_stage, to_stage = self._stages[self._current], self._stages[idx]
        queue = self._queues[to_stage]
        if self._shuffle:
            queue.shuffle(self._rng)

        self._current = idx
        self._round_number += 1
        event = RoundEvent(
            round_number=self._round_number,
            from_stage=from_stage,
            to_stage=to_stage,
            queue_size=len(queue),
        )
        self.round_events.append(event)
        logger.info(
            f"Round {event.round_number}: {from_stage.value} -> {to_stage.value} ({event.queue_size} cards)"
        )
        return event

    # ── verdicts ─────────────────────────────────────────────────────

    def apply_verdict(self, is_correct: bool) -> Transition:
        """
        Move the active card according to the transition table.

        Raises:
            NoActiveCardError: If no card has been served.
        """
        if self._active is None:
            raise NoActiveCardError()

        card_id, stage = self._active.card_id, self._active.stage
        queue = self._queues[stage]
        queue.remove(card_id)

        if is_correct:
            idx = self._stages.index(stage)
            if idx + 1 < len(self._stages):
                to_stage = self._stages[idx + 1]
                self._queues[to_stage].enqueue_tail(card_id)
            else:
                to_stage = Stage.MASTERED
                self._mastered.append(card_id)
                self._mastered_set.add(card_id)
        else:
            to_stage = stage
            queue.enqueue_tail(card_id)

        self._active = None
        logger.debug(f"Card {card_id!r}: {stage.value} -> {to_stage.value} (correct={is_correct})")
        return Transition(card_id=card_id, from_stage=stage, to_stage=to_stage, is_correct=is_correct)

    def defer_active(self) -> Hashable:
        """
        Send the active card to the tail of its own queue without a verdict.

        Raises:
            NoActiveCardError: If no card has been served.
        """
        if self._active is None:
            raise NoActiveCardError()

        card_id, stage = self._active.card_id, self._active.stage
        queue = self._queues[stage]
        queue.remove(card_id)
        queue.enqueue_tail(card_id)
        self._active = None
        logger.debug(f"Card {card_id!r} deferred in {stage.value}")
        return card_id

    # ── introspection ────────────────────────────────────────────────

    @property
    def active(self) -> Optional[ScheduledCard]:
        return self._active

    @property
    def plan(self) -> StagePlan:
        return self._plan

    @property
    def current_stage(self) -> Stage:
        return Stage.MASTERED if self.is_complete() else self._stages[self._current]

    @property
    def round_number(self) -> int:
        return self._round_number

    @property
    def mastered(self) -> List[Hashable]:
        return list(self._mastered)

    @property
    def total(self) -> int:
        return len(self._all_ids)

    def queue(self, stage: Stage) -> ScheduleQueue:
        """Queue for *stage*; stages outside the plan get an empty one."""
        return self._queues.get(Stage(stage), ScheduleQueue())

    def stage_of(self, card_id: Hashable) -> Stage:
        if card_id in self._mastered_set:
            return Stage.MASTERED
        for stage, queue in self._queues.items():
            if card_id in queue:
                return stage
        raise KeyError(card_id)

    def counts(self) -> Dict[Stage, int]:
        counts = {stage: len(queue) for stage, queue in self._queues.items()}
        counts[Stage.MASTERED] = len(self._mastered)
        return counts

    def is_complete(self) -> bool:
        return len(self._mastered) == len(self._all_ids)

    def check_invariants(self) -> None:
        """
        Verify every id sits in exactly one queue or the mastered set.

        Raises:
            SchedulerStateError: On duplicates, missing or foreign ids.
        """
        seen: List[Hashable] = list(self._mastered)
        for queue in self._queues.values():
            seen.extend(queue.snapshot())

        if len(seen) != len(set(seen)):
            raise SchedulerStateError('A card id appears in more than one place', {'ids': seen})
        if set(seen) != set(self._all_ids):
            raise SchedulerStateError(
                'Queues and mastered set do not cover the deck',
                {'expected': len(self._all_ids), 'found': len(seen)},
            )
