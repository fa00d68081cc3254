# File: mastery_app/modules/cards/schemas.py
"""
Card DTOs.

``CardInput`` validates the raw card shape coming from the platform
(``term`` / ``definition`` plus optional Chinese ``pinyin`` and
``translation`` fields).  ``Card`` is the immutable value the engine
works with once a pool is loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Direction(str, Enum):
    """Which side of a raw card is shown as the prompt."""

    TERM_TO_DEFINITION = 'term_to_definition'
    DEFINITION_TO_TERM = 'definition_to_term'


class CardInput(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    id: Optional[Union[int, str]] = Field(default=None, validation_alias=AliasChoices('id', '_id'))
    term: Optional[str] = Field(default=None, validation_alias=AliasChoices('term', 'prompt', 'front'))
    definition: Optional[str] = Field(default=None, validation_alias=AliasChoices('definition', 'answer', 'back'))
    pinyin: Optional[str] = Field(default=None, validation_alias=AliasChoices('pinyin', 'phonetic'))
    translation: Optional[str] = None
    image_url: Optional[str] = Field(default=None, validation_alias=AliasChoices('imageUrl', 'image_url', 'illustration'))
    accepted_answers: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices('acceptedAnswers', 'accepted_answers'),
    )

    @field_validator('term', 'definition', 'pinyin', 'translation', 'image_url', mode='before')
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator('accepted_answers', mode='before')
    @classmethod
    def drop_empty_variants(cls, v: Any) -> List[str]:
        if not v:
            return []
        if isinstance(v, str):
            v = [v]
        return [str(x) for x in v if x is not None and str(x).strip()]


@dataclass(frozen=True, eq=False)
class Card:
    """
    Immutable card value.  Equality and hashing use ``id`` only.

    ``accepted_answers`` is already normalized and always contains the
    normalized ``answer`` first.
    """

    id: Hashable
    prompt: str
    answer: str
    accepted_answers: Tuple[str, ...] = field(default_factory=tuple)
    illustration: Optional[str] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True)
class RejectedCard:
    """A raw entry filtered out while loading a pool."""

    index: int
    reason: str
    code: str = 'MALFORMED_CARD'
