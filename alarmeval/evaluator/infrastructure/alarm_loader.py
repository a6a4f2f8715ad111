"""Alarm loaders for loading alarm definitions from various sources."""

from typing import Any

from loguru import logger

from alarmeval.evaluator.domain.protocols import AlarmLoader


class DictAlarmLoader(AlarmLoader):
    """Simple loader that returns pre-provided alarm definitions."""

    def __init__(self, alarms: list[dict[str, Any]]):
        self.alarms = alarms

    async def load_alarms(self, tenant_id: str | None = None, **kwargs) -> list[dict[str, Any]]:
        """
        Return the provided alarm definitions.

        Args:
            tenant_id: Only return alarms of this tenant
            **kwargs: Ignored
        """
        alarms = [a for a in self.alarms if tenant_id is None or a.get("tenant_id") == tenant_id]
        logger.info(f"Loaded {len(alarms)} alarms from dict")
        return alarms
