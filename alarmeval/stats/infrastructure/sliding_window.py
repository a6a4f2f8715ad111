"""Time based sliding window of incrementally updated statistics."""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from loguru import logger

from alarmeval.stats.domain.exceptions import OutOfWindowError
from alarmeval.stats.domain.resolution import TimeResolution
from alarmeval.stats.domain.statistic import Statistic

T = TypeVar("T")


@dataclass
class Slot(Generic[T]):
    """One fixed-width time bucket of the window."""

    timestamp: int
    stat: Statistic[T]

    def __str__(self) -> str:
        return f"{self.timestamp}={self.stat}"


class SlidingWindowStats(Generic[T]):
    """
    A time based sliding window containing statistics for a fixed number of slots of a fixed
    width. The window provides a fixed size view over the total number of slots.

    The view ends at ``view_end_timestamp`` (non-inclusive). An additional ``num_future_slots``
    accept values for timestamps beyond the view, so samples that arrive slightly early still
    land in a slot. It is recommended to make the view end one time unit more than the time
    intended for the last view slot, so that values slide all the way across the view.

    Not thread safe: ``add_value`` and ``slide_view_to`` must be serialized by the caller.
    """

    def __init__(
        self,
        statistic_factory: Callable[[], Statistic[T]],
        time_resolution: TimeResolution,
        slot_width: int,
        num_view_slots: int,
        num_future_slots: int,
        view_end_timestamp: int,
    ):
        """
        Initialize the window with every slot empty.

        Args:
            statistic_factory: Creates the statistic held by each slot
            time_resolution: Rule used to adjust every timestamp
            slot_width: Time based width of a slot
            num_view_slots: Number of viewable slots
            num_future_slots: Number of slots beyond the view that accept values
            view_end_timestamp: Timestamp the view ends at, non-inclusive
        """
        if slot_width <= 0:
            raise ValueError(f"Slot width must be positive, got {slot_width}")
        if num_view_slots <= 0 or num_future_slots < 0:
            raise ValueError(
                f"Invalid slot counts: view={num_view_slots}, future={num_future_slots}"
            )

        self.time_resolution = time_resolution
        self.slot_width = slot_width
        self.num_view_slots = num_view_slots
        self.num_future_slots = num_future_slots
        self.window_length = (num_view_slots + num_future_slots) * slot_width

        self.view_end_timestamp = time_resolution.adjust(view_end_timestamp)
        self.slot_end_timestamp = self.view_end_timestamp
        self.window_end_timestamp = self.view_end_timestamp + num_future_slots * slot_width
        self.window_begin_index = 0

        window_start = self.window_end_timestamp - self.window_length
        self.slots: list[Slot[T]] = [
            Slot(window_start + i * slot_width, statistic_factory())
            for i in range(num_view_slots + num_future_slots)
        ]

        logger.debug(
            f"Initialized sliding window with {len(self.slots)} slots of width {slot_width}, "
            f"view ending at {self.view_end_timestamp}"
        )

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    @property
    def window_start_timestamp(self) -> int:
        return self.window_end_timestamp - self.window_length

    def add_value(self, value: float | str, timestamp: int) -> bool:
        """
        Add the value to the statistic of the slot associated with the timestamp.

        Returns:
            True if the value was added, False if the timestamp is outside of the window
        """
        index = self.index_of_time(self.time_resolution.adjust(timestamp))
        if index == -1:
            return False
        self.slots[index].stat.add_value(value)
        return True

    def get_timestamps(self) -> list[int]:
        """Return the start timestamps of the view slots, oldest to newest."""
        start = self.window_start_timestamp
        return [start + i * self.slot_width for i in range(self.num_view_slots)]

    def get_value(self, timestamp: int) -> T:
        """
        Return the value of the slot associated with the timestamp.

        Raises:
            OutOfWindowError: If the timestamp is not covered by the window
        """
        timestamp = self.time_resolution.adjust(timestamp)
        index = self.index_of_time(timestamp)
        if index == -1:
            raise self._out_of_window(timestamp)
        return self.slots[index].stat.value()

    def get_values_up_to(self, timestamp: int) -> list[T]:
        """
        Return the values from the start of the window up to and including the slot for the
        timestamp. Uninitialized slots read as their statistic's uninitialized value.

        Raises:
            OutOfWindowError: If the timestamp is not covered by the window
        """
        timestamp = self.time_resolution.adjust(timestamp)
        end_index = self.index_of_time(timestamp)
        if end_index == -1:
            raise self._out_of_window(timestamp)
        return self._values(self.length_to_index(end_index))

    def get_view_values(self) -> list[T]:
        """Return the values of the view, oldest to newest."""
        return self._values(self.num_view_slots)

    def get_window_values(self) -> list[T]:
        """Return the values of every slot including future slots, oldest to newest."""
        return self._values(len(self.slots))

    def slide_view_to(self, timestamp: int) -> None:
        """Slide the view to the slot for the timestamp, erasing slots along the way."""
        if timestamp <= self.view_end_timestamp:
            return

        time_diff = timestamp - self.slot_end_timestamp
        slots_to_advance = -(-time_diff // self.slot_width)

        # Past a full turn every slot is overwritten anyway
        skipped = max(0, slots_to_advance - len(self.slots))
        if skipped:
            self.window_begin_index = (self.window_begin_index + skipped) % len(self.slots)
            self.slot_end_timestamp += skipped * self.slot_width
            self.window_end_timestamp += skipped * self.slot_width

        for _ in range(slots_to_advance - skipped):
            self.window_begin_index = self._index_after(self.window_begin_index)
            slot = self.slots[self.index_of(len(self.slots) - 1)]
            slot.timestamp = self.window_end_timestamp
            slot.stat.reset()

            self.slot_end_timestamp += self.slot_width
            self.window_end_timestamp += self.slot_width

        self.view_end_timestamp += slots_to_advance * self.slot_width

    def index_of(self, slot_index: int) -> int:
        """Return the physical index of the logical slot index, counted from the window start."""
        offset = self.window_begin_index + slot_index
        if offset >= len(self.slots):
            offset -= len(self.slots)
        return offset

    def index_of_time(self, timestamp: int) -> int:
        """
        Return the physical index of the slot associated with the timestamp, else -1 if the
        timestamp is outside of the window. Slots increase in time from left to right, wrapping.
        """
        if timestamp < self.window_end_timestamp:
            time_diff = timestamp - self.window_start_timestamp
            if time_diff >= 0:
                return self.index_of(time_diff // self.slot_width)
        return -1

    def length_to_index(self, slot_index: int) -> int:
        """Return the length of the window up to and including the physical slot index."""
        if self.window_begin_index <= slot_index:
            return slot_index - self.window_begin_index + 1
        return slot_index + len(self.slots) - self.window_begin_index + 1

    def _index_after(self, index: int) -> int:
        index += 1
        return 0 if index == len(self.slots) else index

    def _values(self, length: int) -> list[T]:
        values = []
        index = self.window_begin_index
        for _ in range(length):
            values.append(self.slots[index].stat.value())
            index = self._index_after(index)
        return values

    def _out_of_window(self, timestamp: int) -> OutOfWindowError:
        return OutOfWindowError(timestamp, self.window_start_timestamp, self.window_end_timestamp)

    def __str__(self) -> str:
        """Return a logical view of the window with timestamps increasing from left to right."""
        view_slots_to_display = 3

        parts = [
            f"SlidingWindowStats timescale = {self.time_resolution} slotWidth = {self.slot_width} "
            f"viewEndTimestamp = {self.view_end_timestamp} "
            f"slotEndTimestamp = {self.slot_end_timestamp} [("
        ]
        start = max(0, self.num_view_slots - view_slots_to_display)
        if start:
            parts.append("... ")

        index = self.index_of(start)
        for i in range(start, len(self.slots)):
            if i == self.num_view_slots:
                parts.append("), ")
            elif i != start:
                parts.append(", ")
            parts.append(str(self.slots[index]))
            index = self._index_after(index)

        if self.num_future_slots == 0:
            parts.append(")")
        parts.append("]")
        return "".join(parts)
