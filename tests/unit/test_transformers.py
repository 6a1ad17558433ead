"""
Unit tests for train normalization and sentinel resolution
"""

import pytest
from ingestion.transformers.normalizer import TrainNormalizer, resolve_sentinel, SENTINEL
from schemas.feed import RawStationTime, RawTrain


class TestResolveSentinel:

    def test_sentinel_becomes_none(self):
        assert resolve_sentinel("&mdash;") is None

    def test_missing_stays_none(self):
        assert resolve_sentinel(None) is None

    def test_value_passes_through(self):
        assert resolve_sentinel("2024-01-01T09:30") == "2024-01-01T09:30"


class TestStationTimeNormalization:
    """Sentinel rules per field of a station time"""

    def setup_method(self):
        self.normalizer = TrainNormalizer()

    def test_top_level_estimated_sentinel_is_dropped(self):
        raw = RawStationTime(station="Montréal", code="MTRL", estimated=SENTINEL)

        result = self.normalizer.normalize_station_time(raw)

        assert result.estimated is None

    def test_top_level_scheduled_sentinel_is_kept(self):
        raw = RawStationTime(station="Dorval", code="DORV", scheduled=SENTINEL)

        result = self.normalizer.normalize_station_time(raw)

        assert result.scheduled == SENTINEL

    def test_arrival_pair_filtered_independently(self):
        raw = RawStationTime.model_validate({
            "station": "Dorval",
            "code": "DORV",
            "arrival": {"estimated": SENTINEL, "scheduled": "2024-01-01T00:00"}
        })

        result = self.normalizer.normalize_station_time(raw)

        assert result.arrival_estimated is None
        assert result.arrival_scheduled == "2024-01-01T00:00"
        assert result.departure_estimated is None
        assert result.departure_scheduled is None

    def test_departure_pair_all_sentinel(self):
        raw = RawStationTime.model_validate({
            "station": "Ottawa",
            "code": "OTTW",
            "departure": {"estimated": SENTINEL, "scheduled": SENTINEL}
        })

        result = self.normalizer.normalize_station_time(raw)

        assert result.departure_estimated is None
        assert result.departure_scheduled is None

    def test_departure_pair_missing_half(self):
        raw = RawStationTime.model_validate({
            "station": "Ottawa",
            "code": "OTTW",
            "departure": {"scheduled": "2024-01-01T08:00"}
        })

        result = self.normalizer.normalize_station_time(raw)

        assert result.departure_estimated is None
        assert result.departure_scheduled == "2024-01-01T08:00"

    @pytest.mark.parametrize("eta,expected", [
        (SENTINEL, None),
        (None, None),
        ("10:00", "10:00"),
    ])
    def test_eta(self, eta, expected):
        raw = RawStationTime(station="Dorval", code="DORV", eta=eta)

        assert self.normalizer.normalize_station_time(raw).eta == expected

    def test_diff_stored_verbatim(self):
        raw = RawStationTime(station="Dorval", code="DORV", diff=SENTINEL, diffMin=-3)

        result = self.normalizer.normalize_station_time(raw)

        assert result.diff == SENTINEL
        assert result.diff_min == -3


class TestTrainNormalization:

    def test_scalar_fields_copied(self, raw_trains):
        result = TrainNormalizer().normalize("T1", raw_trains["T1"])

        assert result.name == "T1"
        assert result.latitude == 45.5
        assert result.longitude == -73.6
        assert result.speed == 88.5
        assert result.direction == 270.0
        assert result.poll == "2024-01-01T11:58:00Z"
        assert result.poll_min == 2
        assert result.departed is True
        assert result.arrived is False
        assert result.from_station == "MTRL"
        assert result.to_station == "TRTO"
        assert result.instance == "2024-01-01"

    def test_station_times_keep_feed_order(self, raw_trains):
        result = TrainNormalizer().normalize("T1", raw_trains["T1"])

        assert [st.code for st in result.times] == ["MTRL", "DORV"]

    def test_optional_scalars_stay_none(self):
        result = TrainNormalizer().normalize("T9", RawTrain())

        assert result.latitude is None
        assert result.longitude is None
        assert result.poll is None
        assert result.poll_min is None
        assert result.times == []
