"""Motion classification, fall alerts and location relay for a fitness UI."""

__version__ = "0.1.0"
