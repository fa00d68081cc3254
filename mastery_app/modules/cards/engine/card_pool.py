"""
Card Pool.
Validated, immutable set of cards loaded once per session.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from mastery_app.core.errors import MalformedCardError
from ..logics.variants import build_accepted_answers
from ..schemas import Card, CardInput, Direction, RejectedCard

logger = logging.getLogger(__name__)

RawCard = Union[Mapping[str, Any], CardInput, Card]


class CardPool:
    """
    Ordered, read-only collection of ``Card`` objects keyed by id.

    Build it with ``CardPool.load`` for raw platform data, or pass
    ready-made ``Card`` objects straight to the constructor.
    """

    def __init__(self, cards: Iterable[Card], rejected: Sequence[RejectedCard] = ()):
        self._cards: Tuple[Card, ...] = tuple(self._ensure_answer_variant(card) for card in cards)
        self._by_id: Dict[Hashable, Card] = {}
        for card in self._cards:
            if card.id in self._by_id:
                raise ValueError(f"Duplicate card id {card.id!r} in pool")
            self._by_id[card.id] = card
        self.rejected: Tuple[RejectedCard, ...] = tuple(rejected)

    @staticmethod
    def _ensure_answer_variant(card: Card) -> Card:
        """Normalized ``answer`` first, then the card's own variants."""
        accepted = build_accepted_answers(card.answer, extra=card.accepted_answers)
        if accepted == card.accepted_answers:
            return card
        return replace(card, accepted_answers=accepted)

    # ── construction ─────────────────────────────────────────────────

    @classmethod
    def load(
        cls,
        raw_cards: Iterable[RawCard],
        direction: Union[Direction, str] = Direction.TERM_TO_DEFINITION,
        strict: bool = False,
    ) -> 'CardPool':
        """
        Validate raw cards and build a pool.

        Entries without a prompt or answer, or reusing an id already
        loaded, are skipped and listed in ``pool.rejected``.  With
        ``strict=True`` the first such entry raises ``MalformedCardError``.

        Entries without an id get their 1-based position, moved up past
        any id another entry declares.
        """
        direction = Direction(direction)
        parsed = [cls._parse(raw) for raw in raw_cards]
        explicit_ids = {
            data.id for data, _ in parsed
            if data is not None and data.id is not None
        }

        cards: List[Card] = []
        rejected: List[RejectedCard] = []
        seen_ids = set()

        for idx, (data, reason) in enumerate(parsed):
            card = None
            if data is not None:
                card_id = data.id
                if card_id is None:
                    card_id = idx + 1
                    while card_id in explicit_ids or card_id in seen_ids:
                        card_id += 1
                card, reason = cls._build_card(data, card_id, direction)

            if card is not None and card.id in seen_ids:
                card, reason = None, f"duplicate id {card.id!r}"

            if card is None:
                if strict:
                    raise MalformedCardError(f"Card #{idx}: {reason}", index=idx)
                logger.warning(f"Skipping malformed card #{idx}: {reason}")
                rejected.append(RejectedCard(index=idx, reason=reason))
                continue

            seen_ids.add(card.id)
            cards.append(card)

        logger.info(f"Loaded card pool: {len(cards)} valid, {len(rejected)} rejected")
        return cls(cards, rejected)

    @staticmethod
    def _parse(raw: RawCard) -> Tuple[Optional[Union[Card, CardInput]], str]:
        if isinstance(raw, (Card, CardInput)):
            return raw, ''
        try:
            return CardInput.model_validate(raw), ''
        except ValidationError as e:
            return None, f"invalid card data ({e.error_count()} error(s))"

    @staticmethod
    def _build_card(
        data: Union[Card, CardInput],
        card_id: Hashable,
        direction: Direction,
    ) -> Tuple[Optional[Card], str]:
        if isinstance(data, Card):
            if not data.prompt or not data.answer:
                return None, 'missing prompt or answer'
            return data, ''

        if not data.term or not data.definition:
            return None, 'missing prompt or answer'

        if direction is Direction.DEFINITION_TO_TERM:
            prompt, answer = data.definition, data.term
        else:
            prompt, answer = data.term, data.definition

        accepted = build_accepted_answers(
            answer,
            phonetic=data.pinyin,
            translation=data.translation,
            extra=data.accepted_answers,
        )
        return Card(
            id=card_id,
            prompt=prompt,
            answer=answer,
            accepted_answers=accepted,
            illustration=data.image_url,
        ), ''

    # ── read API ─────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, card_or_id: object) -> bool:
        key = card_or_id.id if isinstance(card_or_id, Card) else card_or_id
        try:
            return key in self._by_id
        except TypeError:
            return False

    def get(self, card_id: Hashable) -> Card:
        """Return the card with *card_id*; ``KeyError`` if unknown."""
        return self._by_id[card_id]

    def ids(self) -> List[Hashable]:
        """Card ids in load order."""
        return [card.id for card in self._cards]

    def subset(self, card_ids: Iterable[Hashable]) -> 'CardPool':
        """New pool restricted to *card_ids*, keeping load order."""
        wanted = set(card_ids)
        return CardPool(card for card in self._cards if card.id in wanted)
