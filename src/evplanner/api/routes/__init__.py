"""Route group exports."""

from . import health, plans, stations, vehicles

__all__ = ["health", "plans", "stations", "vehicles"]
