"""
Settings for the fitness sensor bridge
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fitness_bridge.models import BiometricStatus


class Settings(BaseSettings):
    """Bridge configuration with FITNESS_ prefix"""

    model_config = SettingsConfigDict(
        env_prefix="FITNESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Service identification
    service_name: str = Field(
        default="fitness-bridge",
        description="Name of the service for logging and metrics",
    )
    environment: str = Field(default="development", description="Deployment environment")
    host: str = "0.0.0.0"
    port: int = 8020

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")

    # Motion classification
    history_size: int = Field(default=10, description="Samples in the moving average window")
    step_threshold: float = Field(default=12.0, description="Rising-edge threshold for a step (m/s²)")
    fall_threshold: float = Field(default=25.0, description="Peak magnitude that signals a fall (m/s²)")
    stationary_upper_bound: float = 10.5  # avg magnitude below this is stationary
    walking_upper_bound: float = 13.5  # avg magnitude below this is walking, else running
    activity_confidence_required: int = Field(
        default=3, description="Consecutive agreeing candidates before the label changes"
    )
    fall_cooldown_ms: int = Field(default=5000, description="Minimum gap between fall alerts")
    emit_every_n_samples: int = Field(default=3, description="Motion update cadence")
    step_goal: int = Field(default=30, description="Steps that trigger the goal notification")
    full_reset_on_start: bool = Field(
        default=False,
        description="Also clear history, activity and fall cooldown on start/reset",
    )

    # Streaming
    stream_queue_size: int = Field(default=256, description="Bounded queue per subscription")
    accelerometer_available: bool = True

    # Location
    location_update_interval_ms: int = 1000
    location_min_distance_m: float = 0.0
    location_permission_granted: bool = False
    grant_permission_on_request: bool = True
    gps_provider_enabled: bool = True
    network_provider_enabled: bool = True

    # Biometrics
    biometric_status: BiometricStatus = BiometricStatus.NONE_ENROLLED

    # Notifications
    notification_history_size: int = 50

    # Kafka configuration
    kafka_enabled: bool = False
    kafka_bootstrap_servers: str = Field(
        default="localhost:9092", description="Kafka broker addresses"
    )
    kafka_topic_prefix: str = Field(default="", description="Prefix for all Kafka topics")
    kafka_motion_topic: str = "device.health.motion.classified"
    kafka_fall_topic: str = "device.health.fall.detected"
    kafka_location_topic: str = "device.sensor.gps.relayed"

    def get_kafka_topic(self, topic_name: str) -> str:
        """Get full Kafka topic name with prefix"""
        if self.kafka_topic_prefix:
            return f"{self.kafka_topic_prefix}.{topic_name}"
        return topic_name


settings = Settings()
