"""Servo-loop simulator for a two-axis electro-optical director with UDP telemetry."""

__version__ = "0.1.0"