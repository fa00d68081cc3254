import os
import random
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mastery_app.modules.cards.engine.card_pool import CardPool
from mastery_app.modules.scheduling.schemas import EvaluatorKind


RAW_DECK = [
    {'id': 1, 'term': 'der Apfel', 'definition': 'apple'},
    {'id': 2, 'term': 'die Birne', 'definition': 'pear'},
    {'id': 3, 'term': 'die Traube', 'definition': 'grape'},
    {'id': 4, 'term': 'die Kirsche', 'definition': 'cherry'},
    {'id': 5, 'term': 'die Zitrone', 'definition': 'lemon'},
]


@pytest.fixture
def raw_deck():
    return [dict(card) for card in RAW_DECK]


@pytest.fixture
def pool(raw_deck):
    return CardPool.load(raw_deck)


@pytest.fixture
def rng():
    return random.Random(42)


def _correct_input(session, prompt):
    card = session.pool.get(prompt.card_id)
    kind = prompt.evaluator
    if kind == EvaluatorKind.CHOICE:
        return next(i for i, option in enumerate(prompt.options) if option.id == card.id)
    if kind == EvaluatorKind.STATEMENT:
        return prompt.statement == card.answer
    if kind == EvaluatorKind.SELF_RATED:
        return True
    return card.answer


def _wrong_input(session, prompt):
    card = session.pool.get(prompt.card_id)
    kind = prompt.evaluator
    if kind == EvaluatorKind.CHOICE:
        return next(i for i, option in enumerate(prompt.options) if option.id != card.id)
    if kind == EvaluatorKind.STATEMENT:
        return prompt.statement != card.answer
    if kind == EvaluatorKind.SELF_RATED:
        return False
    return '###'


@pytest.fixture
def correct_input():
    """Callable(session, prompt) returning an input the prompt accepts."""
    return _correct_input


@pytest.fixture
def wrong_input():
    """Callable(session, prompt) returning an input the prompt rejects."""
    return _wrong_input
