"""Charging station directory backed by OpenChargeMap with a built-in fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Literal

import httpx

from ...config import settings
from ...models.domain import ChargingStation, ConnectorType, GeoPoint, Network
from ..geospatial import haversine_km
from ..http import build_client, request_json
from .fallback import fallback_stations_within

logger = logging.getLogger(__name__)

COUNTRY_BASE_PRICE_PER_KWH = {
    "AE": 0.29,
    "SA": 0.25,
    "QA": 0.27,
    "OM": 0.31,
    "BH": 0.28,
    "KW": 0.26,
    "IR": 0.15,
}
DEFAULT_BASE_PRICE_PER_KWH = 0.30
FAST_CHARGING_PREMIUM = 1.2
FAST_CHARGING_THRESHOLD_KW = 100


@dataclass(frozen=True, slots=True)
class StationSearchResult:
    stations: list[ChargingStation]
    source: Literal["live", "fallback"]


def map_operator_to_network(operator_title: str | None) -> Network:
    if not operator_title:
        return Network.OTHER
    operator = operator_title.lower()
    if "dewa" in operator or "dubai" in operator:
        return Network.DEWA
    if "addc" in operator or "abu dhabi" in operator:
        return Network.ADDC
    if "sewa" in operator or "sharjah" in operator:
        return Network.SEWA
    if "tesla" in operator:
        return Network.TESLA
    return Network.OTHER


def _connection_title(connection: dict) -> str:
    return ((connection.get("ConnectionType") or {}).get("Title") or "").lower()


def map_connection_types(connections: Iterable[dict]) -> frozenset[ConnectorType]:
    types: set[ConnectorType] = set()
    for connection in connections:
        title = _connection_title(connection)
        if "ccs" in title or "combo" in title:
            types.add(ConnectorType.CCS2)
        if "chademo" in title:
            types.add(ConnectorType.CHADEMO)
        if "tesla" in title:
            types.add(ConnectorType.TESLA)
        if "type 2" in title or "mennekes" in title:
            types.add(ConnectorType.TYPE2)
        if "gbt" in title or "gb/t" in title:
            types.add(ConnectorType.GBT)
    return frozenset(types)


def estimate_power_kw(connection: dict) -> float:
    """Rated power of a connection, estimated from voltage/amps or connector family when missing."""
    if connection.get("PowerKW"):
        return float(connection["PowerKW"])
    voltage, amps = connection.get("Voltage"), connection.get("Amps")
    if voltage and amps:
        return float(voltage) * float(amps) / 1000
    title = _connection_title(connection)
    if "ccs" in title or "combo" in title:
        return 150.0
    if "chademo" in title:
        return 100.0
    if "tesla" in title:
        return 250.0
    if "type 2" in title:
        return 22.0
    return 50.0


def estimate_cost_per_kwh(country_code: str | None, power_kw: float) -> float:
    base_price = COUNTRY_BASE_PRICE_PER_KWH.get((country_code or "").upper(), DEFAULT_BASE_PRICE_PER_KWH)
    multiplier = FAST_CHARGING_PREMIUM if power_kw > FAST_CHARGING_THRESHOLD_KW else 1.0
    return round(base_price * multiplier, 2)


def infer_amenities(title: str | None, town: str | None) -> tuple[str, ...]:
    amenities: list[str] = []
    title_lower = (title or "").lower()
    town_lower = (town or "").lower()
    if "mall" in title_lower or "shopping" in title_lower:
        amenities += ["Shopping Mall", "Restaurants", "Free WiFi"]
    if "hotel" in title_lower or "resort" in title_lower:
        amenities += ["Hotel", "Restaurants", "Parking"]
    if "airport" in title_lower:
        amenities += ["Airport", "Restaurants", "Free WiFi"]
    if "metro" in title_lower or "station" in title_lower:
        amenities += ["Public Transport", "Parking"]
    if "dubai" in town_lower or "abu dhabi" in town_lower:
        amenities += ["City Center", "Restaurants"]
    return tuple(amenities) if amenities else ("Parking", "Restrooms")


def _format_address(address_info: dict) -> str:
    parts = [
        address_info.get("AddressLine1"),
        address_info.get("Town"),
        address_info.get("StateOrProvince"),
        (address_info.get("Country") or {}).get("Title"),
    ]
    return ", ".join(part for part in parts if part)


def transform_station(record: dict[str, Any]) -> ChargingStation | None:
    """Convert one OpenChargeMap POI into a station, or ``None`` when it is unusable."""
    address_info = record.get("AddressInfo")
    connections = record.get("Connections") or []
    if not address_info or not connections:
        return None

    primary = connections[0]
    power_kw = estimate_power_kw(primary)
    if round(power_kw) <= 0:
        return None

    status = record.get("StatusType") or {}
    title = address_info.get("Title") or "Charging Station"
    country_code = (address_info.get("Country") or {}).get("ISOCode")
    return ChargingStation(
        station_id=f"ocm-{record.get('ID')}",
        name=title,
        location=GeoPoint(float(address_info["Latitude"]), float(address_info["Longitude"])),
        address=_format_address(address_info),
        network=map_operator_to_network((record.get("OperatorInfo") or {}).get("Title")),
        connector_types=map_connection_types(connections),
        max_power_kw=float(round(power_kw)),
        is_available=status.get("IsOperational") is not False,
        number_of_ports=int(record.get("NumberOfPoints") or 1),
        cost_per_kwh=estimate_cost_per_kwh(country_code, power_kw),
        amenities=infer_amenities(title, address_info.get("Town")),
    )


class OpenChargeMapDirectory:
    """Station lookups against OpenChargeMap; never fails, degrading to the built-in list."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        client: httpx.Client | None = None,
        country_codes: Iterable[str] | None = None,
        max_results: int | None = None,
    ) -> None:
        self.base_url = base_url if base_url is not None else settings.charging_directory_url
        self.api_key = api_key if api_key is not None else settings.charging_directory_api_key
        self.country_codes = tuple(country_codes if country_codes is not None else settings.charging_directory_country_codes)
        self.max_results = max_results or settings.charging_directory_max_results
        self._client = client or build_client()

    def close(self) -> None:
        self._client.close()

    def _fetch_live(self, latitude: float, longitude: float, radius_km: float) -> list[ChargingStation]:
        params: dict[str, Any] = {
            "output": "json",
            "latitude": latitude,
            "longitude": longitude,
            "distance": radius_km,
            "distanceunit": "KM",
            "maxresults": self.max_results,
            "compact": "false",
            "verbose": "false",
        }
        if self.country_codes:
            params["countrycode"] = ",".join(self.country_codes)
        if self.api_key:
            params["key"] = self.api_key

        data = request_json(self._client, "GET", self.base_url, params=params, service="charging directory")
        if not isinstance(data, list):
            raise ValueError("Charging directory returned an unexpected payload.")

        stations: list[ChargingStation] = []
        for record in data:
            try:
                station = transform_station(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed station record {record.get('ID')}: {e}")
                continue
            if station is not None:
                stations.append(station)
        return stations

    def search(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        connector_types: Iterable[ConnectorType] | None = None,
    ) -> StationSearchResult:
        wanted = frozenset(connector_types) if connector_types else None
        if not self.base_url:
            return StationSearchResult(fallback_stations_within(latitude, longitude, radius_km, wanted), "fallback")

        try:
            stations = self._fetch_live(latitude, longitude, radius_km)
        except (ConnectionError, httpx.HTTPError, ValueError) as e:
            logger.warning(f"Charging directory unavailable, using fallback stations: {e}")
            return StationSearchResult(fallback_stations_within(latitude, longitude, radius_km, wanted), "fallback")

        filtered = [
            station
            for station in stations
            if haversine_km(latitude, longitude, station.location.latitude, station.location.longitude) <= radius_km
            and (wanted is None or station.connector_types & wanted)
        ]
        logger.debug(f"Charging directory returned {len(filtered)} stations near ({latitude:.4f}, {longitude:.4f})")
        return StationSearchResult(filtered, "live")

    def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        connector_types: Iterable[ConnectorType] | None = None,
    ) -> list[ChargingStation]:
        return self.search(latitude, longitude, radius_km, connector_types).stations
