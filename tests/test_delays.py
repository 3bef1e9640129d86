"""Unit tests for delay, time display and duration helpers."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from flightwatch.tracking.delays import (
    EARLY_COLOR,
    LATE_COLOR,
    NEUTRAL_COLOR,
    calculate_delay_info,
    calculate_enhanced_delay_info,
    calculate_enhanced_flight_duration,
    get_consistent_time_display,
    get_enhanced_time_display,
    get_scheduled_time_for_display,
    get_time_display_props,
    uses_live_provider_times,
)
from flightwatch.tracking.merge import merge_flight_data
from flightwatch.tracking.models import CanonicalStatus
from flightwatch.tracking.transforms import transform_live_response, transform_schedule_response

EDT = timezone(timedelta(hours=-4))


@pytest.fixture
def merged_flight(schedule_response, live_response, now):
    return merge_flight_data(
        transform_schedule_response(schedule_response),
        transform_live_response(live_response),
        now,
    )


class TestCalculateDelayInfo:
    """Tests for calculate_delay_info."""

    def test_twenty_minutes_late(self) -> None:
        info = calculate_delay_info("10:00, Aug 22", "10:20, Aug 22")
        assert info.delay_minutes == 20
        assert info.delay_text == "20m Late"
        assert info.classification == "late"
        assert info.color_tag == LATE_COLOR
        assert info.on_time is False

    def test_instants(self) -> None:
        scheduled = datetime(2025, 8, 22, 10, 0, tzinfo=EDT)
        info = calculate_delay_info(scheduled, scheduled + timedelta(minutes=20))
        assert info.delay_minutes == 20
        assert info.classification == "late"

    def test_across_midnight(self) -> None:
        scheduled = datetime(2025, 8, 22, 23, 50, tzinfo=EDT)
        info = calculate_delay_info(scheduled, scheduled + timedelta(minutes=30))
        assert info.delay_minutes == 30

    def test_early(self) -> None:
        info = calculate_delay_info("2025-08-22T10:00:00Z", "2025-08-22T09:48:00Z")
        assert info.delay_minutes == 12
        assert info.delay_text == "12m Early"
        assert info.classification == "early"
        assert info.color_tag == EARLY_COLOR
        assert info.on_time is True

    def test_small_delay_is_late_but_on_time(self) -> None:
        info = calculate_delay_info("10:00, Aug 22", "10:10, Aug 22")
        assert info.classification == "late"
        assert info.on_time is True

    @pytest.mark.parametrize(
        "scheduled, estimated",
        [
            (None, "10:20, Aug 22"),
            ("10:00, Aug 22", None),
            ("10:00, Aug 22", "10:00, Aug 22"),
            ("garbage", "10:20, Aug 22"),
        ],
    )
    def test_on_time(self, scheduled, estimated) -> None:
        info = calculate_delay_info(scheduled, estimated)
        assert info.delay_minutes == 0
        assert info.delay_text == "On time"
        assert info.color_tag == EARLY_COLOR


class TestTimeDisplayProps:
    def test_shows_estimated_in_red_when_late(self) -> None:
        props = get_time_display_props("10:00, Aug 22", "10:20, Aug 22")
        assert props.display_time == "10:20"
        assert props.time_color == LATE_COLOR

    def test_scheduled_only_is_neutral(self) -> None:
        props = get_time_display_props("2025-08-22T10:00:00-04:00", None)
        assert props.display_time == "10:00"
        assert props.time_color == NEUTRAL_COLOR

    def test_early_is_green(self) -> None:
        props = get_time_display_props("10:00, Aug 22", "09:50, Aug 22")
        assert props.time_color == EARLY_COLOR


class TestUsesLiveProviderTimes:
    def test_in_air_with_live_data(self, merged_flight) -> None:
        assert uses_live_provider_times(merged_flight)

    def test_landed_with_hex_only(self, merged_flight) -> None:
        flight = replace(merged_flight, status=CanonicalStatus.LANDED, live_data=None)
        assert uses_live_provider_times(flight)

    def test_departed_is_excluded(self, merged_flight) -> None:
        flight = replace(merged_flight, status=CanonicalStatus.DEPARTED)
        assert not uses_live_provider_times(flight)

    def test_no_live_record(self, merged_flight) -> None:
        flight = replace(merged_flight, live_data=None, aircraft_hex=None)
        assert not uses_live_provider_times(flight)

    def test_schedule_only(self, schedule_response) -> None:
        assert not uses_live_provider_times(transform_schedule_response(schedule_response))


class TestEnhancedDisplay:
    """Live-provider timestamps shown in each airport's own clock."""

    def test_enhanced_delay_uses_live_timestamps(self, merged_flight) -> None:
        assert calculate_enhanced_delay_info(merged_flight, "departure").delay_text == "12m Late"
        assert calculate_enhanced_delay_info(merged_flight, "arrival").delay_text == "20m Late"

    def test_enhanced_delay_schedule_fallback(self, merged_flight) -> None:
        flight = replace(merged_flight, status=CanonicalStatus.DEPARTED)
        # Schedule provider estimate: 18:10 against 18:00
        assert calculate_enhanced_delay_info(flight, "departure").delay_minutes == 10

    def test_enhanced_time_display(self, merged_flight) -> None:
        arrival = get_enhanced_time_display(merged_flight, "arrival")
        assert arrival.display_time == "21:25"
        assert arrival.time_color == LATE_COLOR
        assert arrival.delay_info.delay_minutes == 20
        assert get_enhanced_time_display(merged_flight, "departure").display_time == "18:12"

    def test_scheduled_time_for_display(self, merged_flight) -> None:
        assert get_scheduled_time_for_display(merged_flight, "departure") == "18:00"
        assert get_scheduled_time_for_display(merged_flight, "arrival") == "21:05"

    def test_scheduled_time_schedule_fallback(self, schedule_response) -> None:
        flight = transform_schedule_response(schedule_response)
        assert get_scheduled_time_for_display(flight, "arrival") == "21:05"

    def test_enhanced_flight_duration(self, merged_flight) -> None:
        # 22:12 UTC actual departure to 04:25 UTC estimated arrival
        assert calculate_enhanced_flight_duration(merged_flight) == "6h 13m"

    def test_flight_duration_schedule_fallback(self, schedule_response) -> None:
        flight = transform_schedule_response(schedule_response)
        # 18:10 EDT to 21:25 PDT
        assert calculate_enhanced_flight_duration(flight) == "6h 15m"


class TestConsistentTimeDisplay:
    """Strike-through display contract."""

    def test_no_delay_single_time(self) -> None:
        display = get_consistent_time_display("10:00", "10:00", 0)
        assert display.show_single_time
        assert display.primary_time == "10:00"
        assert display.secondary_time is None
        assert not display.strikethrough

    def test_no_scheduled_single_time(self) -> None:
        display = get_consistent_time_display("10:20", None, 20)
        assert display.show_single_time
        assert display.primary_time == "10:20"

    def test_same_time_single(self) -> None:
        assert get_consistent_time_display("10:00", "10:00", 5).show_single_time

    def test_delayed_shows_both(self) -> None:
        display = get_consistent_time_display("10:20", "10:00", 20)
        assert not display.show_single_time
        assert display.primary_time == "10:20"
        assert display.secondary_time == "10:00"
        assert display.strikethrough

    def test_missing_actual_falls_back_to_scheduled(self) -> None:
        assert get_consistent_time_display(None, "10:00", 0).primary_time == "10:00"
