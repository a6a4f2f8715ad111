import math

import pytest

from alarmeval.stats.domain.exceptions import OutOfWindowError, StatsException
from alarmeval.stats.domain.resolution import TimeResolution
from alarmeval.stats.domain.statistic import StatisticType
from alarmeval.stats.infrastructure.sliding_window import SlidingWindowStats


def _nan_positions(values):
    return [isinstance(v, float) and math.isnan(v) for v in values]


def _numbers(values):
    return [None if math.isnan(v) else v for v in values]


@pytest.fixture
def filled_window(sum_window):
    sum_window.add_value(1, 6)
    sum_window.add_value(2, 8)
    sum_window.add_value(5, 14)
    sum_window.add_value(7, 20)
    return sum_window


class TestConstruction:
    def test_initial_bounds(self, sum_window):
        assert sum_window.slot_count == 5
        assert sum_window.view_end_timestamp == 15
        assert sum_window.window_end_timestamp == 21
        assert sum_window.window_start_timestamp == 6
        assert [slot.timestamp for slot in sum_window.slots] == [6, 9, 12, 15, 18]

    def test_starts_empty(self, sum_window):
        assert all(_nan_positions(sum_window.get_window_values()))

    @pytest.mark.parametrize(
        "slot_width,num_view_slots,num_future_slots",
        [(0, 3, 2), (-1, 3, 2), (3, 0, 2), (3, 3, -1)],
    )
    def test_rejects_invalid_sizes(self, slot_width, num_view_slots, num_future_slots):
        with pytest.raises(ValueError):
            SlidingWindowStats(
                StatisticType.SUM.create,
                TimeResolution.ABSOLUTE,
                slot_width,
                num_view_slots,
                num_future_slots,
                15,
            )

    def test_adjusts_view_end(self):
        window = SlidingWindowStats(
            StatisticType.SUM.create, TimeResolution.SECONDS, 1000, 2, 1, 3500
        )

        assert window.view_end_timestamp == 3000
        assert window.window_end_timestamp == 4000


class TestAddValue:
    def test_rejects_timestamps_outside_window(self, sum_window):
        assert not sum_window.add_value(2, 5)
        assert not sum_window.add_value(2, 21)
        assert all(_nan_positions(sum_window.get_window_values()))

    def test_accepts_window_bounds(self, sum_window):
        assert sum_window.add_value(1, 6)
        assert sum_window.add_value(1, 20)

    def test_aggregates_per_slot(self, filled_window):
        assert _numbers(filled_window.get_view_values()) == [3.0, None, 5.0]
        assert _numbers(filled_window.get_window_values()) == [3.0, None, 5.0, None, 7.0]

    def test_time_resolution_applies_to_samples(self):
        window = SlidingWindowStats(
            StatisticType.SUM.create, TimeResolution.SECONDS, 1000, 2, 1, 3000
        )

        assert window.add_value(1, 1999)
        assert window.add_value(2, 2000)
        assert window.get_view_values() == [1.0, 2.0]
        assert window.get_value(1500) == 1.0


class TestReads:
    def test_get_timestamps(self, sum_window):
        assert sum_window.get_timestamps() == [6, 9, 12]

    def test_get_value(self, filled_window):
        assert filled_window.get_value(7) == 3.0
        assert filled_window.get_value(18) == 7.0
        assert math.isnan(filled_window.get_value(10))

    @pytest.mark.parametrize("timestamp", [5, 21, 100])
    def test_get_value_outside_window(self, filled_window, timestamp):
        with pytest.raises(OutOfWindowError) as exc_info:
            filled_window.get_value(timestamp)

        assert isinstance(exc_info.value, StatsException)
        assert isinstance(exc_info.value, LookupError)
        assert exc_info.value.details == {
            "timestamp": timestamp,
            "window_start": 6,
            "window_end": 21,
        }

    def test_get_values_up_to(self, filled_window):
        assert _numbers(filled_window.get_values_up_to(12)) == [3.0, None, 5.0]
        assert _numbers(filled_window.get_values_up_to(6)) == [3.0]
        assert len(filled_window.get_values_up_to(20)) == 5

    def test_get_values_up_to_outside_window(self, filled_window):
        with pytest.raises(OutOfWindowError):
            filled_window.get_values_up_to(21)

    def test_length_to_index(self, filled_window):
        assert filled_window.length_to_index(0) == 1
        assert filled_window.length_to_index(4) == 5

    def test_index_of_time(self, sum_window):
        assert sum_window.index_of_time(6) == 0
        assert sum_window.index_of_time(20) == 4
        assert sum_window.index_of_time(5) == -1
        assert sum_window.index_of_time(21) == -1

    def test_str(self, filled_window):
        assert str(filled_window) == (
            "SlidingWindowStats timescale = absolute slotWidth = 3 viewEndTimestamp = 15 "
            "slotEndTimestamp = 15 [(6=3.0, 9=nan, 12=5.0), 15=nan, 18=7.0]"
        )


class TestSlideViewTo:
    def test_slide_to_current_view_end_is_noop(self, filled_window):
        filled_window.slide_view_to(15)
        filled_window.slide_view_to(3)

        assert filled_window.view_end_timestamp == 15
        assert _numbers(filled_window.get_window_values()) == [3.0, None, 5.0, None, 7.0]

    def test_partial_slot_advances_a_whole_slot(self, filled_window):
        filled_window.slide_view_to(16)

        assert filled_window.view_end_timestamp == 18
        assert filled_window.window_end_timestamp == 24
        assert filled_window.window_begin_index == 1
        assert filled_window.get_timestamps() == [9, 12, 15]
        assert _numbers(filled_window.get_view_values()) == [None, 5.0, None]
        assert _numbers(filled_window.get_window_values()) == [None, 5.0, None, 7.0, None]

    def test_old_samples_are_rejected_after_slide(self, filled_window):
        filled_window.slide_view_to(16)

        assert not filled_window.add_value(1, 8)
        assert filled_window.add_value(1, 23)

    def test_future_values_slide_into_view(self, filled_window):
        filled_window.slide_view_to(16)
        filled_window.add_value(1, 23)
        filled_window.slide_view_to(30)

        assert filled_window.view_end_timestamp == 30
        assert filled_window.window_end_timestamp == 36
        assert filled_window.window_begin_index == 0
        assert filled_window.get_timestamps() == [21, 24, 27]
        assert _numbers(filled_window.get_view_values()) == [1.0, None, None]

    def test_wraparound_reuses_slots(self, filled_window):
        filled_window.slide_view_to(21)
        filled_window.add_value(4, 25)

        assert filled_window.window_begin_index == 2
        assert filled_window.get_value(25) == 4.0
        assert _numbers(filled_window.get_values_up_to(25)) == [5.0, None, 7.0, None, 4.0]

    def test_long_slide_matches_step_by_step(self, filled_window):
        stepped = SlidingWindowStats(StatisticType.SUM.create, TimeResolution.ABSOLUTE, 3, 3, 2, 15)
        for value, timestamp in ((1, 6), (2, 8), (5, 14), (7, 20)):
            stepped.add_value(value, timestamp)

        filled_window.slide_view_to(1000)
        for timestamp in range(18, 1001, 3):
            stepped.slide_view_to(timestamp)
        stepped.slide_view_to(1000)

        assert filled_window.view_end_timestamp == stepped.view_end_timestamp == 1002
        assert filled_window.window_end_timestamp == stepped.window_end_timestamp
        assert filled_window.window_begin_index == stepped.window_begin_index
        assert [s.timestamp for s in filled_window.slots] == [s.timestamp for s in stepped.slots]
        assert filled_window.get_timestamps() == [993, 996, 999]
        assert all(_nan_positions(filled_window.get_window_values()))
