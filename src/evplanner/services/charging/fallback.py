"""Built-in station list used when the live directory cannot be reached."""

from __future__ import annotations

from typing import Iterable

from ...models.domain import ChargingStation, ConnectorType, GeoPoint, Network
from ..geospatial import haversine_km

CCS2 = ConnectorType.CCS2
CHADEMO = ConnectorType.CHADEMO
TYPE2 = ConnectorType.TYPE2
TESLA = ConnectorType.TESLA

FALLBACK_STATIONS: tuple[ChargingStation, ...] = (
    ChargingStation(
        station_id="dewa-mall-emirates",
        name="Mall of the Emirates - DEWA Green Charger",
        location=GeoPoint(25.1172, 55.2001),
        address="Mall of the Emirates, Sheikh Zayed Road, Dubai, UAE",
        network=Network.DEWA,
        connector_types=frozenset({CCS2, CHADEMO}),
        max_power_kw=150,
        is_available=True,
        number_of_ports=4,
        cost_per_kwh=0.29,
        amenities=("Shopping Mall", "Restaurants", "Cinema", "Free WiFi"),
    ),
    ChargingStation(
        station_id="dewa-dubai-mall",
        name="Dubai Mall - DEWA Station",
        location=GeoPoint(25.1972, 55.2744),
        address="Dubai Mall, Downtown Dubai, UAE",
        network=Network.DEWA,
        connector_types=frozenset({CCS2, TYPE2}),
        max_power_kw=120,
        is_available=True,
        number_of_ports=8,
        cost_per_kwh=0.29,
        amenities=("Shopping Mall", "Burj Khalifa view", "Metro station"),
    ),
    ChargingStation(
        station_id="tesla-jbr",
        name="Tesla Supercharger - JBR",
        location=GeoPoint(25.0657, 55.1398),
        address="Jumeirah Beach Residence, Dubai, UAE",
        network=Network.TESLA,
        connector_types=frozenset({TESLA, CCS2}),
        max_power_kw=250,
        is_available=True,
        number_of_ports=12,
        cost_per_kwh=0.35,
        amenities=("Beach access", "Restaurants", "Parking"),
    ),
    ChargingStation(
        station_id="addc-yas-mall",
        name="Yas Mall - ADDC Fast Charger",
        location=GeoPoint(24.4888, 54.6094),
        address="Yas Island, Abu Dhabi, UAE",
        network=Network.ADDC,
        connector_types=frozenset({CCS2, CHADEMO, TYPE2}),
        max_power_kw=180,
        is_available=True,
        number_of_ports=6,
        cost_per_kwh=0.27,
        amenities=("Shopping Mall", "Theme parks nearby", "F1 Circuit"),
    ),
    ChargingStation(
        station_id="addc-corniche",
        name="Corniche Beach - ADDC Station",
        location=GeoPoint(24.4764, 54.3705),
        address="Corniche Road, Abu Dhabi, UAE",
        network=Network.ADDC,
        connector_types=frozenset({CCS2, TYPE2}),
        max_power_kw=100,
        is_available=True,
        number_of_ports=4,
        cost_per_kwh=0.27,
        amenities=("Beach access", "Restaurants", "Parking"),
    ),
    ChargingStation(
        station_id="sewa-city-centre",
        name="City Centre Sharjah - SEWA",
        location=GeoPoint(25.3373, 55.4209),
        address="City Centre Sharjah, Sharjah, UAE",
        network=Network.SEWA,
        connector_types=frozenset({CCS2, TYPE2}),
        max_power_kw=120,
        is_available=True,
        number_of_ports=4,
        cost_per_kwh=0.28,
        amenities=("Shopping Mall", "Restaurants", "Cinema"),
    ),
    ChargingStation(
        station_id="sec-khobar",
        name="Al Khobar Charging Hub",
        location=GeoPoint(26.2172, 50.1971),
        address="Prince Faisal Bin Fahd Road, Al Khobar, Saudi Arabia",
        network=Network.OTHER,
        connector_types=frozenset({CCS2, CHADEMO}),
        max_power_kw=150,
        is_available=True,
        number_of_ports=6,
        cost_per_kwh=0.25,
        amenities=("Shopping Center", "Restaurants", "Parking"),
    ),
    ChargingStation(
        station_id="kahramaa-doha",
        name="Doha Festival City - KAHRAMAA",
        location=GeoPoint(25.3548, 51.4326),
        address="Doha Festival City, Doha, Qatar",
        network=Network.OTHER,
        connector_types=frozenset({CCS2, TYPE2}),
        max_power_kw=120,
        is_available=True,
        number_of_ports=4,
        cost_per_kwh=0.27,
        amenities=("Shopping Mall", "Restaurants", "Free WiFi"),
    ),
    ChargingStation(
        station_id="oman-muscat-mall",
        name="Muscat Grand Mall Charging Station",
        location=GeoPoint(23.6086, 58.4291),
        address="Muscat Grand Mall, Muscat, Oman",
        network=Network.OTHER,
        connector_types=frozenset({CCS2, TYPE2}),
        max_power_kw=100,
        is_available=True,
        number_of_ports=4,
        cost_per_kwh=0.31,
        amenities=("Shopping Mall", "Restaurants", "Parking"),
    ),
)


def fallback_stations_within(
    latitude: float,
    longitude: float,
    radius_km: float,
    connector_types: Iterable[ConnectorType] | None = None,
) -> list[ChargingStation]:
    """Fallback stations within ``radius_km`` of the point, in catalogue order."""
    wanted = frozenset(connector_types) if connector_types else None
    stations: list[ChargingStation] = []
    for station in FALLBACK_STATIONS:
        distance = haversine_km(latitude, longitude, station.location.latitude, station.location.longitude)
        if distance > radius_km:
            continue
        if wanted is not None and not (station.connector_types & wanted):
            continue
        stations.append(station)
    return stations
