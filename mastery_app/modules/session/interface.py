# File: mastery_app/modules/session/interface.py
"""
Session Interface
=================
Public entry point for starting study sessions.
Callers hand over raw card dicts (or a ready ``CardPool``) and get a
``StudySession`` back.
"""

from typing import Any, Iterable, Mapping, Union

from mastery_app.modules.cards.engine.card_pool import CardPool
from .schemas import ConfigLike, SessionConfig
from .services.session_service import StudySession


def _coerce_config(config: ConfigLike, overrides: Mapping[str, Any]) -> SessionConfig:
    if config is None:
        config = SessionConfig()
    elif isinstance(config, Mapping):
        config = SessionConfig.from_dict(config)
    elif not isinstance(config, SessionConfig):
        raise TypeError(f"Unsupported session config: {type(config).__name__}")

    if overrides:
        config = config.merged(overrides)
    return config


def create_session(
    cards: Union[CardPool, Iterable[Any]],
    config: ConfigLike = None,
    strict: bool = False,
    **overrides: Any,
) -> StudySession:
    """
    Build a session over *cards*.

    Args:
        cards:     ``CardPool`` or an iterable of raw card mappings.
        config:    ``SessionConfig`` or a dict such as
                   ``{'firstStage': 'recall', 'distractorCount': 3}``.
        strict:    Raise on the first malformed card instead of skipping it.
        overrides: Individual ``SessionConfig`` fields.

    Raises:
        InsufficientCardsError: If fewer valid cards remain than the plan needs.
        MalformedCardError: In strict mode, for the first invalid card.
    """
    session_config = _coerce_config(config, overrides)
    if isinstance(cards, CardPool):
        pool = cards
    else:
        pool = CardPool.load(cards, direction=session_config.direction, strict=strict)
    return StudySession(pool, session_config)
