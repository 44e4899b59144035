"""Energy consumption model helpers."""

from .model import compute_segment_energy, estimate_range_km, weather_impact, weather_multiplier

__all__ = ["compute_segment_energy", "estimate_range_km", "weather_impact", "weather_multiplier"]
