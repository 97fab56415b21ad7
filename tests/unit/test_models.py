"""Unit tests for channel models and errors."""

import pytest
from pydantic import TypeAdapter, ValidationError

from fitness_bridge.errors import (
    AuthenticationInProgress,
    LocationUnavailable,
    PermissionDenied,
    SecurityError,
    SensorUnavailable,
    StreamReplaced,
    UnsupportedOperation,
)
from fitness_bridge.models import (
    ActivityType,
    FallDetected,
    LocationFix,
    MotionEvent,
    MotionSample,
    MotionUpdate,
    SampleBatch,
)


class TestMotionModels:
    """Test wire names of motion events."""

    def test_motion_update_wire_format(self):
        update = MotionUpdate(step_count=12, activity_type=ActivityType.WALKING, avg_magnitude=11.25)

        assert update.to_channel() == {
            "type": "motion_update",
            "stepCount": 12,
            "activityType": "walking",
            "magnitude": 11.25,
        }

    def test_fall_wire_format(self):
        fall = FallDetected(magnitude=31.5, timestamp_millis=1_700_000_000_000)

        assert fall.to_channel() == {
            "type": "fall_detected",
            "magnitude": 31.5,
            "timestamp": 1_700_000_000_000,
        }

    def test_negative_step_count_rejected(self):
        with pytest.raises(ValidationError):
            MotionUpdate(step_count=-1, activity_type=ActivityType.STATIONARY, avg_magnitude=9.8)

    def test_event_union_discriminates_on_type(self):
        adapter = TypeAdapter(MotionEvent)
        event = adapter.validate_python({"type": "fall_detected", "magnitude": 30.0, "timestamp": 5})

        assert isinstance(event, FallDetected)

    def test_sample_accepts_wire_names(self):
        sample = MotionSample.model_validate({"x": 0.1, "y": 9.7, "z": 0.3, "timestamp": 42})
        assert sample.timestamp_millis == 42

    def test_empty_batch_rejected(self):
        with pytest.raises(ValidationError):
            SampleBatch(samples=[])


class TestLocationFix:
    def test_wire_format(self):
        fix = LocationFix.model_validate(
            {
                "latitude": 52.52,
                "longitude": 13.405,
                "altitude": 34.0,
                "speed": 1.4,
                "accuracy": 5.0,
                "timestamp": 1_700_000_000_000,
            }
        )

        assert fix.speed_mps == 1.4
        assert fix.to_channel() == {
            "latitude": 52.52,
            "longitude": 13.405,
            "altitude": 34.0,
            "speed": 1.4,
            "accuracy": 5.0,
            "timestamp": 1_700_000_000_000,
        }

    def test_optional_fields_default_to_zero(self):
        fix = LocationFix(latitude=1.0, longitude=2.0, timestamp_millis=3)
        assert fix.altitude == 0.0
        assert fix.speed_mps == 0.0
        assert fix.accuracy_meters == 0.0


class TestErrors:
    @pytest.mark.parametrize(
        ("error", "code", "status_code"),
        [
            (PermissionDenied(), "PERMISSION_DENIED", 403),
            (LocationUnavailable(), "NO_LOCATION", 404),
            (SecurityError(), "SECURITY_ERROR", 403),
            (UnsupportedOperation(), "NOT_IMPLEMENTED", 501),
            (SensorUnavailable(), "SENSOR_UNAVAILABLE", 503),
            (AuthenticationInProgress(), "AUTHENTICATION_IN_PROGRESS", 409),
            (StreamReplaced(), "STREAM_REPLACED", 409),
        ],
    )
    def test_codes(self, error, code, status_code):
        assert error.code == code
        assert error.status_code == status_code

    def test_channel_form(self):
        error = PermissionDenied("Location permission not granted")

        assert error.to_channel() == {
            "type": "error",
            "code": "PERMISSION_DENIED",
            "message": "Location permission not granted",
        }
