"""
The ordered attempt ladder walked by the lookup orchestrator.

Each rung says which header tier to use and how long to wait before firing.
The first rung fires immediately; later rungs wait a jittered delay whose base
and spread grow by 50ms per rung (200-400ms before the second attempt,
250-500ms before the third).
"""

import random
from dataclasses import dataclass
from typing import Callable, List, Tuple

from .headers import AttemptTier

DELAY_BASE_MS = 200
DELAY_STEP_MS = 50


@dataclass(frozen=True)
class AttemptPlan:
    """One rung of the ladder"""

    index: int
    tier: AttemptTier

    @property
    def delay_bounds_ms(self) -> Tuple[int, int]:
        """Inclusive (min, max) delay before this attempt, in milliseconds"""
        if self.index == 0:
            return (0, 0)
        base = DELAY_BASE_MS + DELAY_STEP_MS * (self.index - 1)
        return (base, base * 2)

    def delay_seconds(self, rand: Callable[[], float] = random.random) -> float:
        low, high = self.delay_bounds_ms
        return (low + (high - low) * rand()) / 1000


def build_ladder(max_attempts: int) -> List[AttemptPlan]:
    """
    Build the attempt ladder

    Args:
        max_attempts: Total number of attempts, at least one

    Returns:
        List[AttemptPlan]: Rungs in the order they are tried
    """
    top = max(AttemptTier)
    return [
        AttemptPlan(index=i, tier=AttemptTier(min(i, top)))
        for i in range(max(1, max_attempts))
    ]
