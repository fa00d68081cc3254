from typing import Dict, Hashable, Iterable, Optional, Sequence, Tuple


class StatsLogic:
    """
    Pure session arithmetic.
    Works on plain outcome lists, nothing here knows about queues or signals.
    """

    @staticmethod
    def accuracy(correct: int, attempts: int) -> float:
        """Share of correct attempts, 0.0 when nothing was attempted."""
        if attempts <= 0:
            return 0.0
        return correct / attempts

    @staticmethod
    def as_percent(ratio: float) -> int:
        # half-up, so 2/3 → 67 and 1/8 → 13
        return int(ratio * 100 + 0.5)

    @staticmethod
    def streaks(outcomes: Iterable[Optional[bool]]) -> Tuple[int, int]:
        """
        Return (current, best) run of correct answers.

        ``None`` marks a skipped card; it breaks the run like a miss does.
        """
        current = best = 0
        for outcome in outcomes:
            if outcome:
                current += 1
                best = max(best, current)
            else:
                current = 0
        return current, best

    @staticmethod
    def mistakes_by_card(attempts: Sequence) -> Dict[Hashable, int]:
        counts: Dict[Hashable, int] = {}
        for attempt in attempts:
            if not attempt.is_correct:
                counts[attempt.card_id] = counts.get(attempt.card_id, 0) + 1
        return counts
