"""
Configuration for the fitness sensor bridge
"""

from fitness_bridge.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
