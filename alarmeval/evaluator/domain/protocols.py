"""Protocols (interfaces) for alarm evaluator components."""

from typing import Any, Protocol

import pandas as pd

from alarmeval.evaluator.domain.models import AlarmStateTransitionedEvent


class AlarmLoader(Protocol):
    """Interface for loading alarm definitions from various sources."""

    async def load_alarms(self, **kwargs) -> list[dict[str, Any]]:
        """
        Load alarm definitions from source.

        Returns:
            List of alarm dictionaries with 'id', 'tenant_id', 'name' and 'expression'
        """
        ...


class EventSink(Protocol):
    """Interface for storing/processing alarm state transition events."""

    def write_event(self, event: AlarmStateTransitionedEvent) -> None:
        """Write a single event."""
        ...

    def write_events(self, events: list[AlarmStateTransitionedEvent]) -> None:
        """Write multiple events."""
        ...

    def to_dataframe(self) -> pd.DataFrame:
        """Convert stored events to DataFrame."""
        ...
