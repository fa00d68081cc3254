# File: mastery_app/modules/modes/factory.py
"""
Mode Factory
============
Maps each ``EvaluatorKind`` a stage plan names to the mode that grades it.

The built-in evaluators (choice, statement, typed, exact, spelled,
self-rated) are imported lazily on first use.  A session asks for one
fresh mode per stage, so modes registered later with ``register()``
apply to sessions created afterwards.
"""

from __future__ import annotations

from typing import Dict, List, Type, Union

from mastery_app.modules.scheduling.schemas import EvaluatorKind
from .base_mode import BaseStudyMode


class ModeFactory:
    """Registry of evaluator classes keyed by ``EvaluatorKind`` value."""

    _modes: Dict[str, Type[BaseStudyMode]] = {}
    _initialised: bool = False

    @classmethod
    def _ensure_builtins(cls) -> None:
        """Import the built-in evaluators once."""
        if cls._initialised:
            return

        from .choice_mode import ChoiceMode
        from .exact_mode import ExactMode
        from .self_rated_mode import SelfRatedMode
        from .spell_mode import SpellMode
        from .statement_mode import StatementMode
        from .typing_mode import TypingMode

        _BUILTIN_MODES = [ChoiceMode, StatementMode, TypingMode, ExactMode, SpellMode, SelfRatedMode]

        for mode_class in _BUILTIN_MODES:
            cls._modes.setdefault(mode_class().get_mode_id(), mode_class)

        cls._initialised = True

    # ── public API ───────────────────────────────────────────────────

    @classmethod
    def register(cls, mode_class: Type[BaseStudyMode]) -> None:
        """Add *mode_class* under its mode id, replacing any evaluator already there."""
        if not (isinstance(mode_class, type) and issubclass(mode_class, BaseStudyMode)):
            raise TypeError(f"{mode_class!r} is not a subclass of BaseStudyMode")
        cls._ensure_builtins()
        cls._modes[mode_class().get_mode_id()] = mode_class

    @classmethod
    def create(cls, kind: Union[EvaluatorKind, str]) -> BaseStudyMode:
        """
        Instantiate a mode by evaluator kind.

        Raises:
            KeyError: If no mode is registered under *kind*.
        """
        cls._ensure_builtins()

        key = kind.value if isinstance(kind, EvaluatorKind) else str(kind)
        mode_class = cls._modes.get(key)
        if mode_class is None:
            raise KeyError(
                f"No evaluator registered for {key!r}. "
                f"Available: {list(cls._modes.keys())}"
            )
        return mode_class()

    @classmethod
    def available_modes(cls) -> List[str]:
        """Ids of every registered evaluator."""
        cls._ensure_builtins()
        return list(cls._modes.keys())
