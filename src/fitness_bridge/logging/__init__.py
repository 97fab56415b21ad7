"""
Structured logging setup for the fitness bridge
"""

from fitness_bridge.logging.setup import select_renderer, service_context, setup_logging

__all__ = ["setup_logging", "service_context", "select_renderer"]
