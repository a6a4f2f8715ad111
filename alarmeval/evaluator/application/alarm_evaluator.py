"""Main AlarmEvaluator application service for streaming alarm evaluation."""

import time
from collections import defaultdict
from typing import Any

import pandas as pd
from loguru import logger

from alarmeval.config import EvaluatorConfig
from alarmeval.evaluator.application.sub_alarm import Alarm, SubAlarm
from alarmeval.evaluator.domain.models import AlarmDefinition, AlarmStateTransitionedEvent
from alarmeval.evaluator.domain.protocols import AlarmLoader, EventSink
from alarmeval.evaluator.infrastructure.event_sink import InMemoryEventSink
from alarmeval.evaluator.infrastructure.logging import LoggingContext
from alarmeval.expression.domain.exceptions import ExpressionSyntaxError
from alarmeval.expression.domain.metric import Metric, MetricDefinition


class AlarmEvaluator:
    """
    Evaluates alarm expressions over streaming metric samples.

    Each distinct sub-expression of each alarm owns a sliding window. Samples are routed to the
    windows whose metric definition matches exactly, and every evaluation tick slides the
    windows and folds the sub-alarm states through the alarm expressions.

    Not thread safe: samples and ticks for one evaluator must be serialized by the caller.
    """

    def __init__(
        self,
        alarms: list[dict[str, Any]],
        config: EvaluatorConfig | None = None,
        event_sink: EventSink | None = None,
        start_timestamp: int | None = None,
    ):
        """
        Initialize alarm evaluator.

        Args:
            alarms: List of alarm dicts with 'id', 'tenant_id', 'name' and 'expression'
            config: Configuration for evaluator behavior
            event_sink: Where to store transition events (defaults to in-memory)
            start_timestamp: Epoch milliseconds the windows' views end at (defaults to now)
        """
        self.config = config or EvaluatorConfig()
        self.event_sink = event_sink if event_sink is not None else InMemoryEventSink()

        if start_timestamp is None:
            start_timestamp = int(time.time() * 1000)

        self.alarms = self._compile_alarms(alarms, start_timestamp)
        self._routes = self._build_routes()

        logger.info(
            f"Initialized AlarmEvaluator with {len(self.alarms)} alarms, "
            f"{len(self._routes)} metric definitions"
        )

    def _compile_alarms(self, alarms: list[dict[str, Any]], start_timestamp: int) -> list[Alarm]:
        """Parse alarm expressions and create their sub-alarm windows."""
        compiled = []

        for data in alarms:
            try:
                definition = AlarmDefinition.from_dict(data)
                compiled.append(Alarm(definition, self.config, start_timestamp))
                logger.debug(f"Compiled alarm: {definition.id}")
            except (KeyError, ExpressionSyntaxError) as e:
                if not self.config.skip_invalid_alarms:
                    raise
                logger.error(f"Failed to compile alarm {data.get('id', 'unknown')}: {e}")

        return compiled

    def _build_routes(self) -> dict[MetricDefinition, list[SubAlarm]]:
        routes: dict[MetricDefinition, list[SubAlarm]] = defaultdict(list)
        for alarm in self.alarms:
            for sub_alarm in alarm.sub_alarms:
                routes[sub_alarm.sub_expression.metric_definition].append(sub_alarm)
        return dict(routes)

    def reset_windows(self, view_end_timestamp: int) -> None:
        """Recreate every alarm with empty windows whose views end at the timestamp."""
        self.alarms = [Alarm(a.definition, self.config, view_end_timestamp) for a in self.alarms]
        self._routes = self._build_routes()

    def add_metric(self, metric: Metric) -> int:
        """
        Route a metric sample to every sub-alarm watching its definition.

        Returns:
            Number of windows that accepted a value
        """
        sub_alarms = self._routes.get(metric.definition)
        if not sub_alarms:
            return 0

        accepted = 0
        for timestamp, value in metric.samples():
            for sub_alarm in sub_alarms:
                if sub_alarm.add_sample(timestamp, value):
                    accepted += 1
                else:
                    logger.warning(
                        f"Discarded sample for {metric.definition} at {timestamp}: "
                        f"outside the window of {sub_alarm.sub_expression}"
                    )
        return accepted

    def evaluate(self, now: int) -> list[AlarmStateTransitionedEvent]:
        """
        Evaluate every alarm at ``now`` and write the resulting transition events.

        Returns:
            Transition events for the alarms that changed state
        """
        events = []

        for alarm in self.alarms:
            with LoggingContext(tenant_id=alarm.definition.tenant_id, alarm_id=alarm.definition.id):
                event = alarm.evaluate(now)
                if event is not None:
                    logger.info(
                        f"Alarm '{event.alarm_name}' {event.old_state} -> {event.new_state}: "
                        f"{event.state_change_reason}"
                    )
                    events.append(event)

        if events:
            self.event_sink.write_events(events)
        return events

    def replay_dataframe(self, df: pd.DataFrame, tick_ms: int, verbose: bool = False) -> pd.DataFrame:
        """
        Replay long-format samples, evaluating at every tick boundary.

        Args:
            df: DataFrame with 'timestamp', 'name', 'dimensions' and 'value' columns.
                Timestamps are epoch milliseconds or datetimes.
            tick_ms: Interval between evaluations in milliseconds
            verbose: Log progress every 100 ticks

        Returns:
            Events DataFrame with alarm state transitions
        """
        if df.empty:
            return self.event_sink.to_dataframe()

        frame = df.copy()
        if not pd.api.types.is_integer_dtype(frame["timestamp"]):
            frame["timestamp"] = frame["timestamp"].map(lambda t: int(pd.Timestamp(t).timestamp() * 1000))
        frame = frame.sort_values("timestamp", kind="stable")

        first = int(frame["timestamp"].iloc[0])
        next_tick = first - first % tick_ms + tick_ms
        self.reset_windows(next_tick - tick_ms)

        logger.info(f"Starting replay of {len(frame)} samples with tick={tick_ms}ms...")
        tick_count = 0
        sample_count = 0

        for row in frame.itertuples(index=False):
            while row.timestamp >= next_tick:
                self.evaluate(next_tick)
                next_tick += tick_ms
                tick_count += 1
                if verbose and tick_count % 100 == 0:
                    logger.info(f"Processed {tick_count} ticks, {sample_count} samples")

            if pd.isna(row.value):
                continue

            dimensions = row.dimensions if isinstance(row.dimensions, dict) else {}
            value = row.value if isinstance(row.value, str) else float(row.value)
            self.add_metric(
                Metric(
                    definition=MetricDefinition(row.name, dimensions),
                    timestamp=int(row.timestamp),
                    value=value,
                )
            )
            sample_count += 1

        self.evaluate(next_tick)
        tick_count += 1

        logger.info(f"✓ Completed replay: {sample_count} samples, {tick_count} ticks")
        return self.event_sink.to_dataframe()

    def get_statistics(self) -> dict:
        """Get statistics about evaluator state."""
        return {
            "num_alarms": len(self.alarms),
            "num_sub_alarms": sum(len(alarm.sub_alarms) for alarm in self.alarms),
            "num_metric_definitions": len(self._routes),
            "states": {alarm.definition.id: alarm.state.value for alarm in self.alarms},
            "total_events": len(self.event_sink) if hasattr(self.event_sink, "__len__") else None,
        }


async def create_evaluator_from_loader(
    loader: AlarmLoader,
    config: EvaluatorConfig | None = None,
    event_sink: EventSink | None = None,
    start_timestamp: int | None = None,
    **filters,
) -> AlarmEvaluator:
    """
    Convenience function to create an AlarmEvaluator from an alarm loader.

    Args:
        loader: Source of alarm definitions
        config: Evaluator configuration
        event_sink: Where to store events
        start_timestamp: Epoch milliseconds the windows' views end at
        **filters: Passed to the loader

    Returns:
        Initialized AlarmEvaluator
    """
    alarms = await loader.load_alarms(**filters)
    return AlarmEvaluator(
        alarms=alarms, config=config, event_sink=event_sink, start_timestamp=start_timestamp
    )
