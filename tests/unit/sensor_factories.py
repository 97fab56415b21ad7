"""Builders for samples and fixes used across the unit tests."""

from fitness_bridge.models import LocationFix, MotionSample


def make_sample(magnitude: float, timestamp: int = 10_000) -> MotionSample:
    """Sample whose vector magnitude is `magnitude`."""
    return MotionSample(x=magnitude, y=0.0, z=0.0, timestamp_millis=timestamp)


def make_fix(
    latitude: float = 52.52,
    longitude: float = 13.405,
    timestamp: int = 1_700_000_000_000,
) -> LocationFix:
    return LocationFix(
        latitude=latitude,
        longitude=longitude,
        altitude=34.0,
        speed_mps=1.4,
        accuracy_meters=5.0,
        timestamp_millis=timestamp,
    )
