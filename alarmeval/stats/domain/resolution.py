"""Timestamp resolutions applied before samples are bucketed into window slots."""

from enum import StrEnum


class TimeResolution(StrEnum):
    """Rules for adjusting epoch-millisecond timestamps before they are bucketed."""

    ABSOLUTE = "absolute"
    SECONDS = "seconds"
    MINUTES = "minutes"

    def adjust(self, timestamp: int) -> int:
        if self is TimeResolution.SECONDS:
            return timestamp - timestamp % 1000
        if self is TimeResolution.MINUTES:
            return timestamp - timestamp % 60000
        return timestamp
