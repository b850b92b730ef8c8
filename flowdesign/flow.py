"""Volumetric and mass flow arithmetic for circular pipes."""

import math

SECONDS_PER_HOUR = 3600


def pipe_area(diameter_mm: float) -> float:
    """Cross-section area in m² for an inner diameter in mm."""
    radius_m = diameter_mm / 2000.0
    return math.pi * radius_m * radius_m


def volume_flow(diameter_mm: float, velocity: float) -> float:
    """Volumetric flow in m³/h."""
    return pipe_area(diameter_mm) * velocity * SECONDS_PER_HOUR


def mass_flow(volume_flow_m3h: float, density_kg_m3: float) -> float:
    """Mass flow in t/h."""
    return volume_flow_m3h * density_kg_m3 / 1000.0
