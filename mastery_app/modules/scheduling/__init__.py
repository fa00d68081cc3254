# File: mastery_app/modules/scheduling/__init__.py
"""
Scheduling Package
==================
Schedule queues and the round controller that promotes cards through
the stages of a plan.
"""

from .engine.queue import ScheduleQueue
from .engine.round_controller import RoundController, ScheduledCard
from .schemas import STAGE_PRESETS, EvaluatorKind, RoundEvent, Stage, StagePlan, Transition, resolve_plan

__all__ = [
    'EvaluatorKind',
    'RoundController',
    'RoundEvent',
    'STAGE_PRESETS',
    'ScheduleQueue',
    'ScheduledCard',
    'Stage',
    'StagePlan',
    'Transition',
    'resolve_plan',
]
