"""Infrastructure layer for windowed statistics."""

from alarmeval.stats.infrastructure.sliding_window import SlidingWindowStats, Slot

__all__ = ["SlidingWindowStats", "Slot"]
