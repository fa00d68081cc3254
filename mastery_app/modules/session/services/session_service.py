# File: mastery_app/modules/session/services/session_service.py
"""
Study Session Service
=====================
Orchestrates one study run: asks the ``RoundController`` which card is
due, lets the stage's mode build the prompt and grade the answer, keeps
the attempt log, and publishes progress over blinker signals.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from mastery_app.core.config import Config
from mastery_app.core.errors import InsufficientCardsError, NoActiveCardError
from mastery_app.core.signals import card_reviewed, round_completed, session_completed
from mastery_app.modules.cards.engine.card_pool import CardPool
from mastery_app.modules.modes.base_mode import BaseStudyMode
from mastery_app.modules.modes.factory import ModeFactory
from mastery_app.modules.scheduling.engine.round_controller import RoundController, ScheduledCard
from mastery_app.modules.scheduling.schemas import RoundEvent, Stage, resolve_plan
from mastery_app.modules.stats.logics.stats_logic import StatsLogic
from ..schemas import (
    COMPLETE,
    Attempt,
    Prompt,
    SessionComplete,
    SessionConfig,
    SessionStats,
    SessionSummary,
    Verdict,
)

logger = logging.getLogger(__name__)


class StudySession:
    """
    Stateful façade over one deck.

    Typical loop::

        prompt = session.next_prompt()
        while prompt is not COMPLETE:
            verdict = session.submit_answer(read_answer(prompt))
            prompt = session.next_prompt()
    """

    def __init__(self, pool: CardPool, config: Optional[SessionConfig] = None):
        self.pool = pool
        self.config = config or SessionConfig()

        self._rng = random.Random(self.config.seed) if self.config.seed is not None else random.Random()
        self._plan = resolve_plan(self.config.base_plan(), self.config.first_stage)
        self._modes: Dict[Stage, BaseStudyMode] = {
            stage: ModeFactory.create(kind) for stage, kind in self._plan
        }

        required = self.required_cards()
        if len(pool) < required:
            raise InsufficientCardsError(available=len(pool), required=required)

        shuffle = self.config.shuffle
        if shuffle is None:
            shuffle = Config.get('SHUFFLE_ON_START')

        self._controller = RoundController(pool.ids(), self._plan, rng=self._rng, shuffle=shuffle)
        self._settings = {
            'distractor_count': self.config.distractor_count,
            'true_ratio': self.config.statement_true_ratio,
        }

        self._attempts: List[Attempt] = []
        self._outcomes: List[Optional[bool]] = []   # None marks a skip
        self._skipped = 0
        self._prompt: Optional[Prompt] = None
        self._interaction: Dict[str, Any] = {}
        self._completion_sent = False

        self.started_at = datetime.now(timezone.utc)
        self._started_clock = time.monotonic()
        self._finished_clock: Optional[float] = None

        logger.info(
            f"Session started: preset={self.config.preset}, cards={len(pool)}, "
            f"stages={[stage.value for stage, _ in self._plan]}"
        )

    def required_cards(self) -> int:
        """Smallest deck this session's plan can run on."""
        return max(
            [Config.get('MIN_CARDS'), self.config.min_cards or 0]
            + [mode.min_cards for mode in self._modes.values()]
        )

    # ── study loop ───────────────────────────────────────────────────

    def next_prompt(self) -> Union[Prompt, SessionComplete]:
        """
        Return the prompt for the card now due, or ``COMPLETE``.

        Repeated calls without a submission return the same prompt.
        """
        if self._prompt is not None:
            return self._prompt

        scheduled = self._controller.next_card()
        if scheduled is None:
            self._finish()
            return COMPLETE

        self._prompt = self._build_prompt(scheduled)

        # once per event: a failed build leaves no prompt and sends nothing
        if scheduled.round_event is not None:
            self._emit(round_completed, event=scheduled.round_event)
        return self._prompt

    def _build_prompt(self, scheduled: ScheduledCard) -> Prompt:
        card = self.pool.get(scheduled.card_id)
        mode = self._modes[scheduled.stage]
        self._interaction = mode.format_interaction(card, self.pool, self._settings, self._rng)

        statement = self._interaction.get('statement')
        return Prompt(
            stage=scheduled.stage,
            card_id=card.id,
            display_prompt=card.prompt,
            evaluator=scheduled.evaluator,
            options=self._interaction.get('options'),
            statement=statement.shown_answer if statement is not None else None,
            hint=self._interaction.get('hint'),
            illustration=card.illustration,
            round_number=scheduled.round_number,
            round_event=scheduled.round_event,
            progress=self._progress(),
        )

    def submit_answer(self, user_input: Any) -> Verdict:
        """
        Grade *user_input* for the current prompt and advance the card.

        Raises:
            NoActiveCardError: If no prompt is outstanding.
        """
        if self._prompt is None:
            raise NoActiveCardError()

        prompt = self._prompt
        card = self.pool.get(prompt.card_id)
        evaluation = self._modes[prompt.stage].evaluate_submission(card, user_input, self._interaction)
        transition = self._controller.apply_verdict(evaluation.is_correct)

        self._attempts.append(
            Attempt(card_id=card.id, stage=prompt.stage, is_correct=evaluation.is_correct)
        )
        self._outcomes.append(evaluation.is_correct)
        self._prompt = None
        self._interaction = {}

        self._emit(
            card_reviewed,
            card_id=card.id,
            stage=transition.from_stage,
            next_stage=transition.to_stage,
            is_correct=evaluation.is_correct,
            attempt_number=len(self._attempts),
        )

        finished = self._controller.is_complete()
        if finished:
            self._finish()

        return Verdict(
            is_correct=evaluation.is_correct,
            correct_answer=card.answer,
            card_id=card.id,
            stage=transition.from_stage,
            next_stage=transition.to_stage,
            match_tier=evaluation.match_tier,
            feedback=evaluation.feedback,
            session_complete=finished,
        )

    def skip(self):
        """
        Put the current card back at the tail of its queue.

        Not an attempt: stats are untouched except the streak, which resets.

        Raises:
            NoActiveCardError: If no prompt is outstanding.
        """
        if self._prompt is None:
            raise NoActiveCardError()

        card_id = self._controller.defer_active()
        self._prompt = None
        self._interaction = {}
        self._skipped += 1
        self._outcomes.append(None)
        return card_id

    # ── state ────────────────────────────────────────────────────────

    def is_complete(self) -> bool:
        return self._controller.is_complete()

    @property
    def attempts(self) -> Tuple[Attempt, ...]:
        return tuple(self._attempts)

    @property
    def round_events(self) -> List[RoundEvent]:
        return list(self._controller.round_events)

    @property
    def controller(self) -> RoundController:
        return self._controller

    def _progress(self) -> Dict[str, int]:
        counts = self._controller.counts()
        mastered = counts[Stage.MASTERED]
        return {
            'mastered': mastered,
            'total': self._controller.total,
            'remaining': self._controller.total - mastered,
            'round': self._controller.round_number,
            **{stage.value: size for stage, size in counts.items() if stage != Stage.MASTERED},
        }

    def stats(self) -> SessionStats:
        correct = sum(1 for attempt in self._attempts if attempt.is_correct)
        total_attempts = len(self._attempts)
        accuracy = StatsLogic.accuracy(correct, total_attempts)
        streak, best_streak = StatsLogic.streaks(self._outcomes)

        return SessionStats(
            attempts=total_attempts,
            correct_count=correct,
            incorrect_count=total_attempts - correct,
            accuracy=accuracy,
            accuracy_percent=StatsLogic.as_percent(accuracy),
            mastered_count=len(self._controller.mastered),
            total_count=self._controller.total,
            streak=streak,
            best_streak=best_streak,
            skipped=self._skipped,
            rounds=self._controller.round_number,
            mistakes=StatsLogic.mistakes_by_card(self._attempts),
        )

    def summary(self) -> SessionSummary:
        stats = self.stats()
        end = self._finished_clock if self._finished_clock is not None else time.monotonic()
        return SessionSummary(
            preset=self.config.preset if not self.config.stage_plan else 'custom',
            total_items=stats.total_count,
            attempts=stats.attempts,
            correct=stats.correct_count,
            incorrect=stats.incorrect_count,
            accuracy=stats.accuracy,
            duration_seconds=round(end - self._started_clock, 3),
            started_at=self.started_at.isoformat(),
            extra={'rounds': stats.rounds, 'best_streak': stats.best_streak, 'skipped': stats.skipped},
        )

    # ── restart ──────────────────────────────────────────────────────

    def restart(self) -> 'StudySession':
        """Fresh session over the same deck and config."""
        return StudySession(self.pool, self.config)

    def restart_with_missed(self) -> 'StudySession':
        """
        Fresh session over only the cards answered wrong at least once.

        Raises:
            InsufficientCardsError: If too few cards were missed for the plan.
        """
        missed = {attempt.card_id for attempt in self._attempts if not attempt.is_correct}
        ordered = [card_id for card_id in self.pool.ids() if card_id in missed]
        logger.info(f"Restarting with {len(ordered)} missed cards")
        return StudySession(self.pool.subset(ordered), self.config)

    # ── signals ──────────────────────────────────────────────────────

    def _finish(self) -> None:
        if self._completion_sent:
            return
        self._completion_sent = True
        self._finished_clock = time.monotonic()

        summary = self.summary()
        logger.info(
            f"Session complete: {summary.correct}/{summary.attempts} correct, "
            f"{summary.total_items} cards in {summary.duration_seconds}s"
        )
        self._emit(session_completed, summary=summary)

    def _emit(self, signal, **payload) -> None:
        try:
            signal.send(self, **payload)
        except Exception as e:
            logger.error(f"Signal '{signal.name}' receiver failed: {e}", exc_info=True)
