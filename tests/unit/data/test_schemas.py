"""Tests for the core data schemas."""

import pytest
from pydantic import ValidationError

from geo_guard.core.types import AttemptStatus
from geo_guard.data.schemas.geo_point import GeoPoint
from geo_guard.data.schemas.login_attempt import LoginAttemptRecord
from geo_guard.data.schemas.session import LoginSample, Session, new_session_id


class TestGeoPoint:
    """Tests for GeoPoint validation."""

    def test_missing_accuracy_is_zero(self):
        assert GeoPoint(latitude=1, longitude=2).accuracy_meters == 0.0
        assert GeoPoint(latitude=1, longitude=2, accuracy_meters=None).accuracy_meters == 0.0

    @pytest.mark.parametrize("lat,lng", [(90.1, 0), (-90.1, 0), (0, 180.1), (0, -180.1)])
    def test_out_of_range_coordinates(self, lat, lng):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=lat, longitude=lng)

    def test_negative_accuracy_rejected(self):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=0, longitude=0, accuracy_meters=-1)

    def test_frozen(self):
        point = GeoPoint(latitude=0, longitude=0)
        with pytest.raises(ValidationError):
            point.latitude = 1


class TestSession:
    """Tests for LoginSample and Session."""

    def test_session_ids_are_unique(self):
        ids = {new_session_id() for _ in range(1000)}

        assert len(ids) == 1000
        assert all(i.startswith("sess_") for i in ids)

    def test_from_sample_copies_fields(self):
        sample = LoginSample(
            location=GeoPoint(latitude=1, longitude=2, accuracy_meters=3),
            timestamp_millis=42,
            ip_address="10.0.0.1",
        )

        session = Session.from_sample(sample)

        assert session.location == sample.location
        assert session.timestamp_millis == 42
        assert session.ip_address == "10.0.0.1"
        assert session.session_id.startswith("sess_")

    def test_is_active(self):
        session = Session(location=GeoPoint(latitude=0, longitude=0), timestamp_millis=1000)

        assert session.is_active(now_millis=1999, window_millis=1000)
        assert not session.is_active(now_millis=2000, window_millis=1000)

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            LoginSample(location=GeoPoint(latitude=0, longitude=0), timestamp_millis=-1)


class TestLoginAttemptRecord:
    """Tests for attempt status derivation."""

    @pytest.mark.parametrize("success,suspicious,status", [
        (True, False, AttemptStatus.SUCCESS),
        (True, True, AttemptStatus.BLOCKED),
        (False, False, AttemptStatus.FAILED),
    ])
    def test_status(self, success, suspicious, status):
        record = LoginAttemptRecord(
            username="john@example.com",
            success=success,
            suspicious=suspicious,
            timestamp_millis=0,
        )

        assert record.status == status
