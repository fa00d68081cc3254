# File: mastery_app/modules/cards/__init__.py
"""
Cards Package
=============
Raw card validation and the immutable ``CardPool`` a session runs on.
"""

from .engine.card_pool import CardPool
from .logics.variants import build_accepted_answers
from .schemas import Card, CardInput, Direction, RejectedCard

__all__ = ['Card', 'CardInput', 'CardPool', 'Direction', 'RejectedCard', 'build_accepted_answers']
