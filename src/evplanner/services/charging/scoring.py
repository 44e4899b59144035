"""Station eligibility and ranking."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import ChargingStation, Network, Vehicle

NETWORK_BONUS = {
    Network.TESLA: 20,
    Network.DEWA: 15,
    Network.ADDC: 10,
}


def is_eligible(station: ChargingStation, vehicle: Vehicle) -> bool:
    return station.is_available and bool(station.connector_types & vehicle.connector_types)


def score_station(station: ChargingStation) -> float:
    """Higher is better: power, network reliability, port count and amenities."""
    return (
        station.max_power_kw / 10
        + NETWORK_BONUS.get(station.network, 0)
        + station.number_of_ports
        + len(station.amenities)
    )


def select_best_station(stations: Sequence[ChargingStation], vehicle: Vehicle) -> ChargingStation | None:
    """Best eligible station; on equal scores the one listed first wins."""
    best: ChargingStation | None = None
    best_score = float("-inf")
    for station in stations:
        if not is_eligible(station, vehicle):
            continue
        score = score_station(station)
        if score > best_score:
            best, best_score = station, score
    return best
