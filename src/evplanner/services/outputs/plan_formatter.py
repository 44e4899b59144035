"""Serializers for route plan outputs."""

from __future__ import annotations

import csv
import io

from ...models.domain import ChargingStation, ChargingStop, GeoPoint, RoutePlan, RouteSegment, Vehicle


def point_to_json(point: GeoPoint) -> dict:
    return {"latitude": point.latitude, "longitude": point.longitude, "elevation": point.elevation}


def vehicle_to_json(vehicle: Vehicle) -> dict:
    return {
        "name": vehicle.name,
        "battery_capacity_kwh": vehicle.battery_capacity_kwh,
        "efficiency_wh_per_km": vehicle.efficiency_wh_per_km,
        "mass_kg": vehicle.mass_kg,
        "drag_coefficient": vehicle.drag_coefficient,
        "frontal_area_m2": vehicle.frontal_area_m2,
        "max_charging_speed_kw": vehicle.max_charging_speed_kw,
        "connector_types": sorted(connector.value for connector in vehicle.connector_types),
    }


def station_to_json(station: ChargingStation) -> dict:
    return {
        "station_id": station.station_id,
        "name": station.name,
        "address": station.address,
        "location": point_to_json(station.location),
        "network": station.network.value,
        "connector_types": sorted(connector.value for connector in station.connector_types),
        "max_power_kw": station.max_power_kw,
        "is_available": station.is_available,
        "number_of_ports": station.number_of_ports,
        "cost_per_kwh": station.cost_per_kwh,
        "amenities": list(station.amenities),
    }


def segment_to_json(segment: RouteSegment) -> dict:
    return {
        "start": point_to_json(segment.start),
        "end": point_to_json(segment.end),
        "distance_km": segment.distance_km,
        "duration_min": segment.duration_min,
        "elevation_gain_m": segment.elevation_gain_m,
        "energy_required_kwh": segment.energy_required_kwh,
    }


def stop_to_json(stop: ChargingStop) -> dict:
    return {
        "station": station_to_json(stop.station),
        "arrival_soc": stop.arrival_soc,
        "departure_soc": stop.departure_soc,
        "charging_time_min": stop.charging_time_min,
        "energy_added_kwh": stop.energy_added_kwh,
        "estimated_cost": stop.estimated_cost,
    }


def plan_to_json(plan: RoutePlan) -> dict:
    return {
        "origin": point_to_json(plan.origin),
        "destination": point_to_json(plan.destination),
        "vehicle": vehicle_to_json(plan.vehicle),
        "initial_soc": plan.initial_soc,
        "segments": [segment_to_json(segment) for segment in plan.segments],
        "charging_stops": [stop_to_json(stop) for stop in plan.charging_stops],
        "total_distance_km": plan.total_distance_km,
        "total_duration_min": plan.total_duration_min,
        "total_energy_used_kwh": plan.total_energy_used_kwh,
        "final_soc": plan.final_soc,
        "weather_impact": plan.weather_impact,
        "driving_duration_min": plan.driving_duration_min,
        "charging_duration_min": plan.charging_duration_min,
        "total_elevation_gain_m": plan.total_elevation_gain_m,
        "average_consumption_kwh_per_100km": plan.average_consumption_kwh_per_100km,
        "total_charging_cost": plan.total_charging_cost,
        "soc_trajectory": list(plan.soc_trajectory),
        "feasible": plan.feasible,
        "warnings": list(plan.warnings),
    }


def stops_to_csv(plan: RoutePlan) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "station_id",
        "station_name",
        "network",
        "latitude",
        "longitude",
        "arrival_soc",
        "departure_soc",
        "charging_time_min",
        "energy_added_kwh",
        "estimated_cost",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for sequence, stop in enumerate(plan.charging_stops, start=1):
        writer.writerow(
            {
                "sequence": sequence,
                "station_id": stop.station.station_id,
                "station_name": stop.station.name,
                "network": stop.station.network.value,
                "latitude": stop.station.location.latitude,
                "longitude": stop.station.location.longitude,
                "arrival_soc": stop.arrival_soc,
                "departure_soc": stop.departure_soc,
                "charging_time_min": stop.charging_time_min,
                "energy_added_kwh": stop.energy_added_kwh,
                "estimated_cost": stop.estimated_cost if stop.estimated_cost is not None else "",
            }
        )
    return buffer.getvalue()
