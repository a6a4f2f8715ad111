"""Domain models for the alarm evaluator."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class AlarmState(StrEnum):
    """State of an alarm or of one of its sub-alarms."""

    OK = "OK"
    ALARM = "ALARM"
    UNDETERMINED = "UNDETERMINED"


@dataclass
class AlarmDefinition:
    """An alarm to evaluate, as loaded from an alarm source."""

    id: str
    tenant_id: str
    name: str
    expression: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlarmDefinition":
        return cls(
            id=str(data["id"]),
            tenant_id=str(data["tenant_id"]),
            name=data.get("name", str(data["id"])),
            expression=data["expression"],
            description=data.get("description", ""),
        )


@dataclass
class AlarmStateTransitionedEvent:
    """Represents an alarm state transition having occurred."""

    tenant_id: str
    alarm_id: str
    alarm_name: str
    old_state: AlarmState
    new_state: AlarmState
    state_change_reason: str
    timestamp: int
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for DataFrame/storage."""
        return {
            "tenant_id": self.tenant_id,
            "alarm_id": self.alarm_id,
            "alarm_name": self.alarm_name,
            "old_state": self.old_state.value,
            "new_state": self.new_state.value,
            "state_change_reason": self.state_change_reason,
            "timestamp": self.timestamp,
            **self.metadata,
        }
