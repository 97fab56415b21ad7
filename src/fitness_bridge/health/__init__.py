"""
Health check utilities for the fitness bridge
"""

from fitness_bridge.health.checks import HealthChecker, kafka_broker_reachable
from fitness_bridge.health.router import create_health_router

__all__ = ["create_health_router", "HealthChecker", "kafka_broker_reachable"]
