# File: mastery_app/modules/scheduling/schemas.py
"""
Scheduling DTOs
===============
Stages, evaluator kinds and the stage plans built from them.

A *stage plan* is data: an ordered tuple of ``(Stage, EvaluatorKind)``
pairs consumed by the single ``RoundController``.  Learning modes differ
only in the plan they hand over.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, Optional, Tuple


class Stage(str, Enum):
    PRESENTATION = 'presentation'   # multiple choice / statement judgment
    RECALL = 'recall'               # free-text typed
    MASTERED = 'mastered'           # terminal


class EvaluatorKind(str, Enum):
    CHOICE = 'choice'           # pick one option, input = option index
    STATEMENT = 'statement'     # judge a true/false statement, input = bool
    TYPED = 'typed'             # free text, fuzzy matcher
    EXACT = 'exact'             # free text, normalized equality only, scrambled-letter hint
    SPELLED = 'spelled'         # free text, normalized equality only, no letters given
    SELF_RATED = 'self_rated'   # know / don't know, input = bool


StagePlan = Tuple[Tuple[Stage, EvaluatorKind], ...]

STAGE_PRESETS: Dict[str, StagePlan] = {
    'study': ((Stage.PRESENTATION, EvaluatorKind.CHOICE), (Stage.RECALL, EvaluatorKind.TYPED)),
    'flashcards': ((Stage.PRESENTATION, EvaluatorKind.SELF_RATED),),
    'write': ((Stage.RECALL, EvaluatorKind.TYPED),),
    'true_false': ((Stage.PRESENTATION, EvaluatorKind.STATEMENT),),
    'scramble': ((Stage.RECALL, EvaluatorKind.EXACT),),
    'spell': ((Stage.RECALL, EvaluatorKind.SPELLED),),
}


def resolve_plan(plan: StagePlan, first_stage: Optional[Stage] = None) -> StagePlan:
    """
    Validate *plan* and drop the stages before *first_stage*.

    Raises:
        ValueError: On an empty plan, a Mastered entry, repeated stages,
                    or a *first_stage* that is not part of the plan.
    """
    plan = tuple((Stage(stage), EvaluatorKind(kind)) for stage, kind in plan)
    if not plan:
        raise ValueError('Stage plan must contain at least one stage')

    stages = [stage for stage, _ in plan]
    if Stage.MASTERED in stages:
        raise ValueError('Mastered is terminal and cannot be part of a stage plan')
    if len(set(stages)) != len(stages):
        raise ValueError(f'Stage plan repeats a stage: {stages}')

    if first_stage is None:
        return plan
    first_stage = Stage(first_stage)
    if first_stage not in stages:
        raise ValueError(f'first_stage {first_stage.value!r} is not in plan {[s.value for s in stages]}')
    return plan[stages.index(first_stage):]


@dataclass(frozen=True)
class Transition:
    """Result of applying a verdict to the active card."""

    card_id: Hashable
    from_stage: Stage
    to_stage: Stage
    is_correct: bool


@dataclass(frozen=True)
class RoundEvent:
    """Service moved from one stage queue to the next."""

    round_number: int
    from_stage: Stage
    to_stage: Stage
    queue_size: int
