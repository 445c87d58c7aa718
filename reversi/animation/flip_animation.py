"""Cosmetic flip animation timing.

Nothing here touches the board. The manager only tracks which cells are
currently flipping and whether an animation is running; the session uses the
latter to refuse input while pieces are still turning over.
"""

import asyncio
import math
from typing import Awaitable, Callable, List, Optional, Sequence, Set, Tuple

from ..config import TimingConfig, settings
from ..engine.constants import Position


def schedule_flips(
    placed: Position,
    flipped: Sequence[Position],
    delay_per_unit_ms: int,
) -> List[Tuple[int, Position]]:
    """Return (delay_ms, position) pairs, nearest pieces first.

    The delay is the Euclidean distance from the placed stone times
    delay_per_unit_ms, truncated to whole milliseconds.
    """
    schedule = []
    for pos in flipped:
        distance = math.hypot(pos[0] - placed[0], pos[1] - placed[1])
        schedule.append((int(distance * delay_per_unit_ms), Position(*pos)))
    schedule.sort(key=lambda item: item[0])
    return schedule


class FlipAnimationManager:
    """Runs flip animations concurrently and gates input while they play."""

    def __init__(
        self,
        timing: Optional[TimingConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.timing = timing or settings.TIMING
        self._sleep = sleep
        self._flipping: Set[Position] = set()
        self._is_animating = False
        # Bumped by reset(); callbacks from an older generation do nothing
        self._generation = 0

    @property
    def is_animating(self) -> bool:
        return self._is_animating

    @property
    def flipping(self) -> Set[Position]:
        return set(self._flipping)

    def is_flipping(self, row: int, col: int) -> bool:
        return Position(row, col) in self._flipping

    def set_animating(self, value: bool) -> None:
        self._is_animating = value

    def reset(self) -> None:
        """Clear all animation state, invalidating pending flips."""
        self._generation += 1
        self._flipping.clear()
        self._is_animating = False

    async def animate_flip(self, placed: Position, flipped: Sequence[Position]) -> None:
        """
        Play every flip in parallel, then pause briefly.

        Each piece is marked as flipping after its distance-based delay and
        unmarked flip_duration_ms later. Completion is the join of all flips
        plus pause_after_animation_ms.
        """
        generation = self._generation
        self._is_animating = True

        schedule = schedule_flips(placed, flipped, self.timing.flip_delay_per_unit_ms)
        await asyncio.gather(*(self._flip_one(delay, pos, generation) for delay, pos in schedule))

        await self._sleep(self.timing.pause_after_animation_ms / 1000)
        if generation == self._generation:
            self._is_animating = False

    async def _flip_one(self, delay_ms: int, pos: Position, generation: int) -> None:
        await self._sleep(delay_ms / 1000)
        if generation != self._generation:
            return
        self._flipping.add(pos)

        await self._sleep(self.timing.flip_duration_ms / 1000)
        if generation != self._generation:
            return
        self._flipping.discard(pos)
