# File: mastery_app/modules/session/schemas.py
"""
Session DTOs
============
Plain dataclasses exchanged with the UI layer and the stats reporter.
No engine objects other than ``Card`` leak across this boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Hashable, List, Mapping, Optional, Union

from mastery_app.modules.cards.schemas import Card, Direction
from mastery_app.modules.scheduling.schemas import (
    STAGE_PRESETS,
    EvaluatorKind,
    RoundEvent,
    Stage,
    StagePlan,
)


@dataclass
class SessionConfig:
    """
    How a session schedules and judges cards.

    ``stage_plan`` wins over ``preset`` when both are given.
    ``first_stage`` drops the stages that come before it in the plan.
    """

    preset: str = 'study'
    stage_plan: Optional[StagePlan] = None
    first_stage: Optional[Stage] = None
    distractor_count: Optional[int] = None
    direction: Direction = Direction.TERM_TO_DEFINITION
    shuffle: Optional[bool] = None
    seed: Optional[int] = None
    min_cards: Optional[int] = None
    statement_true_ratio: Optional[float] = None

    _KEY_ALIASES = {
        'firstStage': 'first_stage',
        'distractorCount': 'distractor_count',
        'stagePlan': 'stage_plan',
        'minCards': 'min_cards',
        'statementTrueRatio': 'statement_true_ratio',
        'mode': 'preset',
    }

    @classmethod
    def _field_values(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        kwargs = {}
        for key, value in data.items():
            name = cls._KEY_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                kwargs[name] = value
        if kwargs.get('first_stage') is not None:
            kwargs['first_stage'] = Stage(kwargs['first_stage'])
        if kwargs.get('direction') is not None:
            kwargs['direction'] = Direction(kwargs['direction'])
        return kwargs

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SessionConfig':
        """Build from a plain dict; camelCase keys from the web client are accepted."""
        return cls(**cls._field_values(data))

    def merged(self, overrides: Mapping[str, Any]) -> 'SessionConfig':
        """Copy with *overrides* (same key forms as ``from_dict``) applied."""
        values = {name: getattr(self, name) for name in self.__dataclass_fields__}
        values.update(self._field_values(overrides))
        return SessionConfig(**values)

    def base_plan(self) -> StagePlan:
        if self.stage_plan:
            return tuple(self.stage_plan)
        try:
            return STAGE_PRESETS[self.preset]
        except KeyError:
            raise ValueError(
                f"Unknown preset {self.preset!r}. Available: {list(STAGE_PRESETS.keys())}"
            ) from None


@dataclass(frozen=True)
class SessionComplete:
    """Returned by ``next_prompt`` once every card is mastered."""

    def __bool__(self) -> bool:
        return False


COMPLETE = SessionComplete()


@dataclass
class Prompt:
    """What the UI shows for the *current* card."""

    stage: Stage
    card_id: Hashable
    display_prompt: str
    evaluator: EvaluatorKind
    options: Optional[List[Card]] = None        # choice stages
    statement: Optional[str] = None             # answer shown in a true/false claim
    hint: Optional[Dict[str, Any]] = None       # length / scrambled letters
    illustration: Optional[str] = None
    round_number: int = 1
    round_event: Optional[RoundEvent] = None
    progress: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Verdict:
    """Feedback returned after a submission."""

    is_correct: bool
    correct_answer: str
    card_id: Hashable
    stage: Stage
    next_stage: Stage
    match_tier: Optional[str] = None
    feedback: Dict[str, Any] = field(default_factory=dict)
    session_complete: bool = False


@dataclass(frozen=True)
class Attempt:
    card_id: Hashable
    stage: Stage
    is_correct: bool
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class SessionStats:
    attempts: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    accuracy: float = 0.0          # 0.0 – 1.0
    accuracy_percent: int = 0      # rounded, for display
    mastered_count: int = 0
    total_count: int = 0
    streak: int = 0
    best_streak: int = 0
    skipped: int = 0
    rounds: int = 1
    mistakes: Dict[Hashable, int] = field(default_factory=dict)


@dataclass
class SessionSummary:
    """Sent with ``session_completed``; the payload stats collaborators persist."""

    preset: str
    total_items: int = 0
    attempts: int = 0
    correct: int = 0
    incorrect: int = 0
    accuracy: float = 0.0
    duration_seconds: float = 0.0
    started_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    extra: Dict[str, Any] = field(default_factory=dict)


ConfigLike = Union[SessionConfig, Mapping[str, Any], None]
