"""Unit tests for configuration management."""

import os
from unittest.mock import patch

from fitness_bridge.config import Settings
from fitness_bridge.models import BiometricStatus


class TestSettingsDefault:
    """Test default configuration values."""

    def test_motion_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.history_size == 10
        assert settings.step_threshold == 12.0
        assert settings.fall_threshold == 25.0
        assert settings.stationary_upper_bound == 10.5
        assert settings.walking_upper_bound == 13.5
        assert settings.activity_confidence_required == 3
        assert settings.fall_cooldown_ms == 5000
        assert settings.emit_every_n_samples == 3
        assert settings.step_goal == 30
        assert settings.full_reset_on_start is False

    def test_service_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.service_name == "fitness-bridge"
        assert settings.port == 8020
        assert settings.log_level == "INFO"
        assert settings.kafka_enabled is False
        assert settings.biometric_status == BiometricStatus.NONE_ENROLLED


class TestSettingsEnvironmentVariables:
    """Test configuration from environment variables."""

    def test_motion_environment_variables(self):
        env_vars = {
            "FITNESS_STEP_THRESHOLD": "11.5",
            "FITNESS_STEP_GOAL": "100",
            "FITNESS_FULL_RESET_ON_START": "true",
        }

        with patch.dict(os.environ, env_vars):
            settings = Settings(_env_file=None)

        assert settings.step_threshold == 11.5
        assert settings.step_goal == 100
        assert settings.full_reset_on_start is True

    def test_device_environment_variables(self):
        env_vars = {
            "FITNESS_ACCELEROMETER_AVAILABLE": "false",
            "FITNESS_LOCATION_PERMISSION_GRANTED": "true",
            "FITNESS_BIOMETRIC_STATUS": "success",
        }

        with patch.dict(os.environ, env_vars):
            settings = Settings(_env_file=None)

        assert settings.accelerometer_available is False
        assert settings.location_permission_granted is True
        assert settings.biometric_status == BiometricStatus.SUCCESS


class TestKafkaTopics:
    def test_topic_without_prefix(self):
        settings = Settings(_env_file=None)
        assert settings.get_kafka_topic("device.health.fall.detected") == "device.health.fall.detected"

    def test_topic_with_prefix(self):
        settings = Settings(_env_file=None, kafka_topic_prefix="loom")
        assert settings.get_kafka_topic("device.health.fall.detected") == "loom.device.health.fall.detected"
