"""Metric definitions and samples."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class MetricDefinition(BaseModel):
    """Identity of a metric stream: a name and an unordered set of dimensions."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    dimensions: Mapping[str, str] = Field(default_factory=dict)

    def __init__(self, name: str, dimensions: Mapping[str, str] | None = None, **kwargs):
        super().__init__(name=name, dimensions=dimensions or {}, **kwargs)

    @field_validator("dimensions", mode="after")
    @classmethod
    def _freeze_dimensions(cls, dimensions: Mapping[str, str]) -> Mapping[str, str]:
        # Read-only copy: dimensions take part in the hash
        return MappingProxyType(dict(dimensions))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetricDefinition):
            return NotImplemented
        return self.name == other.name and self.dimensions == other.dimensions

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.dimensions.items())))

    def to_expression(self) -> str:
        if not self.dimensions:
            return self.name
        dims = ",".join(f"{key}={self.dimensions[key]}" for key in sorted(self.dimensions))
        return f"{self.name}{{{dims}}}"

    def __str__(self) -> str:
        return self.to_expression()


class Metric(BaseModel):
    """
    A single sample of a metric stream.

    Carries either a scalar value (a measurement or an opaque string) or a pre-aggregated
    series of (timestamp, value) pairs, never both.
    """

    model_config = ConfigDict(frozen=True)

    definition: MetricDefinition
    timestamp: int
    value: float | str | None = None
    time_values: tuple[tuple[int, float], ...] | None = None

    @model_validator(mode="after")
    def _check_value(self) -> Self:
        if (self.value is None) == (self.time_values is None):
            raise ValueError("Exactly one of value or time_values must be provided")
        return self

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def dimensions(self) -> Mapping[str, str]:
        return self.definition.dimensions

    def samples(self) -> Iterator[tuple[int, float | str]]:
        """Yield the (timestamp, value) pairs carried by this metric."""
        if self.time_values is None:
            yield self.timestamp, self.value
        else:
            yield from self.time_values
