"""Core package for the weather station instrument console."""

__all__ = ["geometry", "gui", "io", "orchestration", "sensors", "telemetry"]
__version__ = "0.1.0"
