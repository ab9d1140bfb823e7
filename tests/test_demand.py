"""Unit tests for the demand model and timestamp resolution."""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.demand import demand_at, is_peak_hour, time_context
from src.domain.entities import TimeContext
from tests.conftest import make_stop

IST = timezone(timedelta(hours=5, minutes=30))


class TestDemandAt:
    def setup_method(self):
        self.stop = make_stop(1, weekday=50, weekend=80)

    def test_weekday_peak(self):
        assert demand_at(self.stop, TimeContext(False, 9)) == 75.0

    def test_weekday_off_peak(self):
        assert demand_at(self.stop, TimeContext(False, 12)) == 50.0

    def test_weekend_peak(self):
        assert demand_at(self.stop, TimeContext(True, 9)) == 120.0

    def test_weekend_off_peak(self):
        assert demand_at(self.stop, TimeContext(True, 3)) == 80.0


class TestPeakHours:
    @pytest.mark.parametrize("hour", [8, 9, 10, 17, 18, 19, 20])
    def test_peak(self, hour):
        assert is_peak_hour(hour)

    @pytest.mark.parametrize("hour", [0, 7, 11, 12, 16, 21, 23])
    def test_off_peak(self, hour):
        assert not is_peak_hour(hour)


class TestTimeContext:
    def test_weekday(self):
        ctx = time_context(datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc), timezone.utc)
        assert ctx == TimeContext(is_weekend=False, hour_of_day=9)

    def test_saturday_and_sunday_are_weekend(self):
        sat = time_context(datetime(2024, 1, 13, 12, tzinfo=timezone.utc), timezone.utc)
        sun = time_context(datetime(2024, 1, 14, 12, tzinfo=timezone.utc), timezone.utc)
        assert sat.is_weekend and sun.is_weekend

    def test_friday_is_weekday(self):
        ctx = time_context(datetime(2024, 1, 12, 23, tzinfo=timezone.utc), timezone.utc)
        assert not ctx.is_weekend

    def test_aware_timestamp_converted_to_zone(self):
        # 09:00 in India is 03:30 UTC
        ctx = time_context(datetime(2024, 1, 15, 9, tzinfo=IST), timezone.utc)
        assert ctx.hour_of_day == 3

    def test_conversion_can_cross_into_weekend(self):
        # Friday 22:00 UTC is already Saturday 03:30 in India
        ctx = time_context(datetime(2024, 1, 12, 22, tzinfo=timezone.utc), IST)
        assert ctx == TimeContext(is_weekend=True, hour_of_day=3)

    def test_naive_timestamp_read_as_local_wall_clock(self):
        ctx = time_context(datetime(2024, 1, 15, 18, 45), IST)
        assert ctx == TimeContext(is_weekend=False, hour_of_day=18)
