"""Multi-marker pose tracking with temporal smoothing and loss hysteresis."""

__version__ = "0.1.0"
