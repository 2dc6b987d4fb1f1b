"""
tests/test_models.py
─────────────────────
Tests for Pydantic v2 data models and request payload validation.
"""
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from config.sensors import SensorType
from src.data.models import (
    NO_HISTORICAL_PATTERN,
    ExcursionCounts,
    ExcursionRecord,
    Reading,
    Segment,
    SegmentStatus,
)
from src.data.payload import parse_request
from src.services.errors import PayloadValidationError


class TestReading:
    def test_bare_number(self):
        r = Reading.model_validate(41.5)
        assert r.value == 41.5
        assert r.timestamp is None

    def test_iso_timestamp_is_utc(self):
        r = Reading.model_validate({"value": 40, "timestamp": "2024-06-01T10:00:00"})
        assert r.timestamp == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

    def test_epoch_milliseconds(self):
        r = Reading.model_validate({"value": 40, "timestamp": 1717236000000})
        assert r.timestamp == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

    def test_epoch_seconds(self):
        r = Reading.model_validate({"value": 40, "timestamp": 1717236000})
        assert r.timestamp == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

    def test_unparseable_timestamp_is_none(self):
        r = Reading.model_validate({"value": 40, "timestamp": "yesterday-ish"})
        assert r.timestamp is None

    @pytest.mark.parametrize("raw", [1e20, -1e19, 10**19, float("inf")])
    def test_out_of_range_epoch_is_none(self, raw):
        assert Reading.model_validate({"value": 40, "timestamp": raw}).timestamp is None

    @pytest.mark.parametrize("raw", [["2024-06-01"], {"iso": "2024-06-01"}, True])
    def test_non_scalar_timestamp_is_none(self, raw):
        assert Reading.model_validate({"value": 40, "timestamp": raw}).timestamp is None

    @pytest.mark.parametrize("raw", [{"raw": 41}, [41.0], True])
    def test_non_numeric_value_is_absent(self, raw):
        assert Reading.model_validate({"value": raw}).value is None


class TestExcursionRecord:
    @pytest.mark.parametrize("key", ["timestamp", "time", "eventTime"])
    def test_timestamp_aliases(self, key):
        record = ExcursionRecord.model_validate({"excursionName": "x", key: "2024-06-01T10:00:00Z"})
        assert record.timestamp == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

    def test_payload_keys(self):
        record = ExcursionRecord.model_validate(
            {"excursionName": "Temp High", "LocationAddress": "Dock 4", "AlarmTypeId": 3}
        )
        assert record.location_address == "Dock 4"
        assert record.alarm_type_id == 3
        assert record.historical_pattern == NO_HISTORICAL_PATTERN


class TestSegment:
    def test_status_normalization(self):
        assert Segment.model_validate({"segmentStatus": "COMPLETED"}).status == SegmentStatus.COMPLETED
        assert Segment.model_validate({"segmentStatus": "Delayed"}).status == SegmentStatus.OTHER
        assert Segment.model_validate({}).status == SegmentStatus.OTHER

    def test_excursions_list_counts(self):
        seg = Segment.model_validate({"excursions": [{"id": 1}, {"id": 2}]})
        assert seg.excursion_count == 2

    def test_excursions_null(self):
        assert Segment.model_validate({"excursions": None}).excursion_count == 0


class TestExcursionCounts:
    def test_addition(self):
        total = ExcursionCounts(warning=1, critical=2) + ExcursionCounts(warning=3)
        assert (total.warning, total.critical, total.total) == (4, 2, 6)

    def test_frozen(self):
        counts = ExcursionCounts()
        with pytest.raises(ValidationError):
            counts.warning = 3

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            ExcursionCounts(warning=-1)


class TestParseRequest:
    def test_valid_payload(self, sample_payload):
        request = parse_request(sample_payload)
        assert request.trip_details.trip_id == "TRP-2024-0042"
        assert request.product_label == "COVID Vaccine (refrigerated)"
        assert request.trip_details.current_location == "Memphis, TN"
        assert len(request.stream(SensorType.TEMPERATURE).readings) == 8

    @pytest.mark.parametrize("payload", [None, {}, [], "text"])
    def test_empty_body(self, payload):
        with pytest.raises(PayloadValidationError, match="Missing or empty trip data"):
            parse_request(payload)

    @pytest.mark.parametrize("field", ["tripDetails", "sensorDetails", "tripPreferences"])
    def test_missing_required_field(self, sample_payload, field):
        del sample_payload[field]
        with pytest.raises(PayloadValidationError) as exc:
            parse_request(sample_payload)
        assert exc.value.status_code == 400
        assert exc.value.details == {"missing": [field]}

    def test_empty_sensor_details(self, sample_payload):
        sample_payload["sensorDetails"] = []
        with pytest.raises(PayloadValidationError):
            parse_request(sample_payload)

    def test_malformed_field_reports_details(self, sample_payload):
        sample_payload["segments"] = "not a list"
        with pytest.raises(PayloadValidationError) as exc:
            parse_request(sample_payload)
        assert exc.value.details[0]["loc"] == "segments"

    def test_optional_lists_may_be_null(self, sample_payload):
        sample_payload["excursionsList"] = None
        sample_payload["segments"] = None
        sample_payload["zoneProducts"] = None
        request = parse_request(sample_payload)
        assert request.excursions_list == []
        assert request.segments == []
        assert request.product_label is None

    def test_only_first_zone_product_used(self, sample_payload):
        sample_payload["zoneProducts"].append({"productName": "Other", "maxTemperature": 1})
        request = parse_request(sample_payload)
        assert request.thresholds(SensorType.TEMPERATURE).max == 46.0

    def test_threshold_keys(self, sample_payload):
        thr = parse_request(sample_payload).thresholds(SensorType.CO2)
        assert (thr.min, thr.max, thr.min2, thr.max2, thr.ideal) == (300.0, 1000.0, None, 2000.0, 400.0)


class TestDisplayUnits:
    def test_defaults(self, sample_payload):
        sample_payload["tripPreferences"] = {}
        prefs = parse_request(sample_payload).trip_preferences
        assert [prefs.display_unit(t) for t in SensorType] == ["°F", "%", "lux", "ppm"]

    def test_celsius_preference(self, sample_payload):
        sample_payload["tripPreferences"] = {"temperatureUnit": "C", "cO2Unit": "ppmv"}
        prefs = parse_request(sample_payload).trip_preferences
        assert prefs.display_unit(SensorType.TEMPERATURE) == "°C"
        assert prefs.display_unit(SensorType.CO2) == "ppmv"
