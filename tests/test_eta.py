"""
tests/test_eta.py
──────────────────
Tests for arrival time prediction.
"""
from datetime import datetime, timedelta, timezone

import pytest

from config.scoring import Confidence
from src.analytics.eta import (
    START_TIME_EXTRACTORS,
    average_segment_minutes,
    eta_confidence,
    excursion_buffer_minutes,
    predict_eta,
    remaining_segment_count,
    resolve_start_time,
    start_time_candidates,
    stop_delay_minutes,
)
from src.data.models import Destination, ExcursionCounts, Segment, StartTimeCandidate
from src.data.payload import parse_request


def _segment(status: str, start: datetime | None = None, minutes: float | None = None) -> Segment:
    data = {"segmentStatus": status}
    if start is not None:
        data["segmentStartTime"] = start.isoformat()
        if minutes is not None:
            data["segmentEndTime"] = (start + timedelta(minutes=minutes)).isoformat()
    return Segment.model_validate(data)


class TestStartTimeResolution:
    def test_first_present_candidate_wins(self, now):
        candidates = [
            StartTimeCandidate(source="a", timestamp=None),
            StartTimeCandidate(source="b", timestamp=now - timedelta(hours=3)),
            StartTimeCandidate(source="c", timestamp=now - timedelta(hours=5)),
        ]
        assert resolve_start_time(candidates, now) == (now - timedelta(hours=3), "b")

    def test_falls_back_to_now(self, now):
        candidates = [StartTimeCandidate(source="a")]
        assert resolve_start_time(candidates, now) == (now, "now")

    def test_precedence_order(self):
        assert [name for name, _ in START_TIME_EXTRACTORS] == [
            "trip_start",
            "origin_departure",
            "first_segment_start",
            "first_destination_arrival",
            "trip_created",
        ]

    @pytest.mark.parametrize(
        "drop, expected",
        [
            ([], "trip_start"),
            (["tripStart"], "origin_departure"),
            (["tripStart", "tripOrigin"], "first_segment_start"),
            (["tripStart", "tripOrigin", "segments"], "first_destination_arrival"),
            (["tripStart", "tripOrigin", "segments", "destinations"], "trip_created"),
            (["tripStart", "tripOrigin", "segments", "destinations", "createDate"], "now"),
        ],
    )
    def test_each_precedence_level(self, sample_payload, now, drop, expected):
        for key in drop:
            if key == "segments":
                sample_payload["segments"] = []
            else:
                sample_payload["tripDetails"].pop(key)
        request = parse_request(sample_payload)
        _, source = resolve_start_time(start_time_candidates(request), now)
        assert source == expected


class TestSegmentTiming:
    def test_default_without_completed_segments(self, now):
        segments = [_segment("Pending"), _segment("In Transit")]
        assert average_segment_minutes(segments) == 45.0
        assert remaining_segment_count(segments) == 2

    def test_mean_of_completed(self, now):
        segments = [_segment("Completed", now, 30), _segment("completed", now, 60), _segment("Open")]
        assert average_segment_minutes(segments) == 45.0
        assert remaining_segment_count(segments) == 1

    def test_completed_without_times_ignored(self, now):
        segments = [_segment("Completed"), _segment("Completed", now, 20)]
        assert average_segment_minutes(segments) == 20.0

    def test_reversed_completed_segment_ignored(self, now):
        segments = [_segment("Completed", now, -10)]
        assert average_segment_minutes(segments) == 45.0


class TestStopDelay:
    def test_dwell_time(self, now):
        dest = Destination(arrivalTime=now, departureTime=now + timedelta(minutes=25))
        assert stop_delay_minutes([dest]) == 25.0

    def test_start_end_aliases(self, now):
        dest = Destination.model_validate(
            {"startTime": now.isoformat(), "endTime": (now + timedelta(minutes=10)).isoformat()}
        )
        assert stop_delay_minutes([dest]) == 10.0

    def test_missing_pair_contributes_zero(self):
        assert stop_delay_minutes([Destination()]) == 0.0

    def test_departure_before_arrival_clamped(self, now):
        dest = Destination(arrivalTime=now, departureTime=now - timedelta(minutes=5))
        assert stop_delay_minutes([dest]) == 0.0

    def test_missing_departure_reads_as_epoch(self, now):
        assert stop_delay_minutes([Destination(arrivalTime=now)]) == 0.0


class TestExcursionBuffer:
    def test_weights(self):
        assert excursion_buffer_minutes(ExcursionCounts(critical=2, warning=3)) == 90

    def test_zero(self):
        assert excursion_buffer_minutes(ExcursionCounts()) == 0


class TestConfidence:
    def test_high_without_excursions(self):
        assert eta_confidence(ExcursionCounts(), 0, 1) == Confidence.HIGH

    def test_moderate_on_critical(self):
        assert eta_confidence(ExcursionCounts(critical=1), 5, 1) == Confidence.MODERATE

    def test_moderate_on_many_warnings(self):
        assert eta_confidence(ExcursionCounts(warning=3), 15, 0) == Confidence.MODERATE

    def test_two_warnings_stay_high(self):
        assert eta_confidence(ExcursionCounts(warning=2), 10, 0) == Confidence.HIGH

    def test_low_on_long_excursions(self):
        assert eta_confidence(ExcursionCounts(critical=13), 65, 0) == Confidence.LOW

    def test_low_on_long_route_overrides(self):
        assert eta_confidence(ExcursionCounts(critical=1), 5, 3) == Confidence.LOW
        assert eta_confidence(ExcursionCounts(), 0, 3) == Confidence.LOW

    @pytest.mark.parametrize("minutes, remaining", [(60, 0), (0, 2), (60, 2)])
    def test_limits_themselves_are_not_low(self, minutes, remaining):
        assert eta_confidence(ExcursionCounts(), minutes, remaining) == Confidence.HIGH
        assert eta_confidence(ExcursionCounts(critical=12), minutes, remaining) == Confidence.MODERATE


class TestPredictEta:
    def test_one_completed_one_remaining(self, now):
        start = now - timedelta(hours=1)
        segments = [_segment("Completed", start, 30), _segment("Open")]
        candidates = [StartTimeCandidate(source="trip_start", timestamp=start)]
        eta = predict_eta(candidates, segments, [], ExcursionCounts(), 0, now=now)
        assert eta.estimated_remaining_minutes == 30.0
        assert eta.predicted_timestamp == start + timedelta(minutes=30)
        assert eta.confidence == Confidence.HIGH
        assert eta.start_time_source == "trip_start"

    def test_default_segment_minutes(self, now):
        segments = [_segment("Open"), _segment("Open")]
        eta = predict_eta([], segments, [], ExcursionCounts(), 0, now=now)
        assert eta.estimated_remaining_minutes == 90.0
        assert eta.predicted_timestamp == now + timedelta(minutes=90)
        assert eta.start_time_source == "now"

    def test_all_components_add_up(self, now):
        start = now - timedelta(hours=2)
        segments = [_segment("Completed", start, 40), _segment("Open")]
        dest = Destination(arrivalTime=start, departureTime=start + timedelta(minutes=15))
        counts = ExcursionCounts(critical=1, warning=1)
        eta = predict_eta(
            [StartTimeCandidate(source="trip_start", timestamp=start)], segments, [dest], counts, 10, now=now
        )
        # 40 remaining + 15 dwell + 30 critical + 10 warning
        assert eta.predicted_timestamp == start + timedelta(minutes=95)
        assert eta.excursion_buffer_minutes == 40
        assert eta.stop_delay_minutes == 15.0
        assert eta.confidence == Confidence.MODERATE

    def test_naive_now_is_utc(self):
        naive = datetime(2024, 6, 1, 12, 0)
        eta = predict_eta([], [], [], ExcursionCounts(), 0, now=naive)
        assert eta.predicted_timestamp == datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
