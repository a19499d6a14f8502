"""
Drives a shatter effect over time.

The controller owns everything with state: the clock, the current progress
and the one-shot completion callback. The fragment engine itself stays pure.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Tuple

from .animator import FragmentAnimator, FragmentArrays, RenderTransform, clamp_progress, pack_fragments
from .config import ShatterConfig
from .errors import GeometryUnavailable
from .fragments import FragmentDescriptor, FragmentFieldBuilder
from .geometry import RandomSource, Rectangle, ViewportSize

logger = logging.getLogger(__name__)


class ShatterController:
    """Runs one shatter effect from trigger to completion.

    Args:
        config: Effect tunables; ``animation_duration_ms`` sets the pace.
        on_complete: Called exactly once when progress reaches 1.0.
        clock: Monotonic time source in seconds, used by ``tick``.
        rng: Random source handed to the builder on every trigger.
    """

    def __init__(
        self,
        config: Optional[ShatterConfig] = None,
        on_complete: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[RandomSource] = None,
    ):
        self.config = config or ShatterConfig()
        self.on_complete = on_complete
        self.clock = clock
        self.rng = rng
        self.builder = FragmentFieldBuilder(self.config)
        self.animator = FragmentAnimator()

        self.fragments: Tuple[FragmentDescriptor, ...] = ()
        self.packed: Optional[FragmentArrays] = None
        self.progress = 0.0
        self.completed = False
        self._started_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return bool(self.fragments) and not self.completed

    def trigger(self, source_rect: Optional[Rectangle], viewport: Optional[ViewportSize]) -> bool:
        """Build a fresh fragment field and restart progress.

        Returns False, leaving the controller idle, when the geometry is not
        available yet.
        """
        try:
            fragments = self.builder.build(source_rect, viewport, rng=self.rng)
        except GeometryUnavailable as e:
            logger.warning("Shatter trigger ignored: %s", e)
            return False

        self.fragments = fragments
        self.packed = pack_fragments(fragments)
        self.progress = 0.0
        self.completed = False
        self._started_at = self.clock()
        logger.info(
            "Shatter triggered: %d fragments over %d ms",
            len(fragments), self.config.animation_duration_ms,
        )
        return True

    def seek(self, progress: float) -> float:
        """Advance progress to ``progress``. Moving backwards is ignored."""
        if not self.fragments:
            return self.progress
        progress = clamp_progress(progress)
        if progress > self.progress:
            self.progress = progress
        if self.progress >= 1.0 and not self.completed:
            self.completed = True
            logger.debug("Shatter complete")
            if self.on_complete is not None:
                self.on_complete()
        return self.progress

    def tick(self) -> List[RenderTransform]:
        """Read the clock, advance progress and evaluate every fragment."""
        if not self.fragments:
            return []
        if not self.completed:
            elapsed = self.clock() - self._started_at
            self.seek(elapsed / self.config.duration_seconds)
        return self.transforms()

    def transforms(self) -> List[RenderTransform]:
        return self.animator.evaluate_all(self.fragments, self.progress)

    def field_transforms(self):
        """Vectorised transforms for the current progress, or None when idle."""
        if self.packed is None:
            return None
        return self.animator.evaluate_field(self.packed, self.progress)

    def cancel(self):
        """Drop the current field without firing the completion callback."""
        self.fragments = ()
        self.packed = None
        self.progress = 0.0
        self.completed = False
        self._started_at = None
