"""Sinks collecting alarm state transition events."""

from pathlib import Path

import pandas as pd
from loguru import logger

from alarmeval.evaluator.domain.models import AlarmState, AlarmStateTransitionedEvent
from alarmeval.evaluator.domain.protocols import EventSink

EVENT_COLUMNS = [
    "tenant_id",
    "alarm_id",
    "alarm_name",
    "old_state",
    "new_state",
    "state_change_reason",
    "timestamp",
]


def events_to_dataframe(events: list[AlarmStateTransitionedEvent]) -> pd.DataFrame:
    """Tabulate events with the transition columns first and metadata columns after."""
    if not events:
        return pd.DataFrame(columns=EVENT_COLUMNS)

    df = pd.DataFrame([event.to_dict() for event in events])
    metadata_columns = [column for column in df.columns if column not in EVENT_COLUMNS]
    return df[EVENT_COLUMNS + metadata_columns]


class InMemoryEventSink(EventSink):
    """Keeps transition events in arrival order. Suited to tests and replays."""

    def __init__(self):
        self.events: list[AlarmStateTransitionedEvent] = []

    def write_event(self, event: AlarmStateTransitionedEvent) -> None:
        self.events.append(event)

    def write_events(self, events: list[AlarmStateTransitionedEvent]) -> None:
        self.events.extend(events)

    def events_for(self, alarm_id: str) -> list[AlarmStateTransitionedEvent]:
        return [event for event in self.events if event.alarm_id == alarm_id]

    def latest_states(self) -> dict[str, AlarmState]:
        """State each alarm reached with its most recent transition."""
        return {event.alarm_id: event.new_state for event in self.events}

    def to_dataframe(self) -> pd.DataFrame:
        return events_to_dataframe(self.events)

    def clear(self):
        self.events.clear()

    def __len__(self):
        return len(self.events)


class CSVEventSink(EventSink):
    """
    Appends transition events to a CSV file in batches.

    Events are held in memory until ``buffer_size`` of them are pending or ``flush`` is
    called. The header is written with the first batch unless the sink appends to a file
    that already has one.
    """

    def __init__(self, filepath: str | Path, mode: str = "w", buffer_size: int = 100):
        """
        Initialize CSV sink.

        Args:
            filepath: Path to CSV file
            mode: 'w' to start a new file, 'a' to append to an existing one
            buffer_size: Number of pending events that triggers a write
        """
        self._pending: list[AlarmStateTransitionedEvent] = []
        if mode not in ("w", "a"):
            raise ValueError(f"Unsupported mode {mode!r}, expected 'w' or 'a'")

        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self._has_header = mode == "a" and self.filepath.exists()
        self._written = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def write_event(self, event: AlarmStateTransitionedEvent) -> None:
        self.write_events([event])

    def write_events(self, events: list[AlarmStateTransitionedEvent]) -> None:
        self._pending.extend(events)
        if len(self._pending) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write pending events to the file."""
        if not self._pending:
            return

        batch = events_to_dataframe(self._pending)
        batch.to_csv(
            self.filepath,
            mode="a" if self._has_header else "w",
            header=not self._has_header,
            index=False,
        )

        self._has_header = True
        self._written += len(batch)
        self._pending.clear()
        logger.debug(f"Wrote {len(batch)} alarm transitions to {self.filepath} ({self._written} total)")

    def to_dataframe(self) -> pd.DataFrame:
        """Read back every event in the file, including those still pending."""
        self.flush()
        if not self.filepath.exists():
            return pd.DataFrame(columns=EVENT_COLUMNS)
        return pd.read_csv(self.filepath)

    def __len__(self):
        return self._written + len(self._pending)

    def __del__(self):
        self.flush()
