"""
Schedule Queue.
FIFO of card ids for one stage.

No priorities and no randomness inside normal operations; ``shuffle``
exists only for queue construction and round transitions.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Hashable, Iterable, List, Optional


class ScheduleQueue:

    def __init__(self, card_ids: Iterable[Hashable] = ()):
        self._items: Deque[Hashable] = deque()
        for card_id in card_ids:
            self.enqueue_tail(card_id)

    def dequeue_front(self) -> Optional[Hashable]:
        """Pop and return the front id, or ``None`` when empty."""
        if not self._items:
            return None
        return self._items.popleft()

    def peek_front(self) -> Optional[Hashable]:
        return self._items[0] if self._items else None

    def enqueue_tail(self, card_id: Hashable) -> None:
        if card_id in self._items:
            raise ValueError(f"Card {card_id!r} is already queued")
        self._items.append(card_id)

    def remove(self, card_id: Hashable) -> None:
        """Take *card_id* out of the queue; ``KeyError`` if absent."""
        try:
            self._items.remove(card_id)
        except ValueError:
            raise KeyError(card_id) from None

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Fisher-Yates shuffle of the whole queue."""
        items: List[Hashable] = list(self._items)
        (rng or random).shuffle(items)
        self._items = deque(items)

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def snapshot(self) -> List[Hashable]:
        """Current order, front first."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._items

    def __iter__(self):
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"ScheduleQueue({list(self._items)!r})"
