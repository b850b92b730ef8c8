"""Approximate fluid densities (kg/m³)."""

from typing import Tuple

STEAM_MARKER = "蒸汽"
DEFAULT_DENSITY = 1000.0

# (upper bound MPa, slope, intercept); the last segment is open-ended.
STEAM_SEGMENTS: Tuple[Tuple[float, float, float], ...] = (
    (0.32, 5.2353, 0.0816),
    (1.00, 5.0221, 0.1517),
    (float("inf"), 4.9283, 0.2173),
)

# First substring match wins.
DENSITY_BY_MARKER: Tuple[Tuple[str, float], ...] = (
    ("水", 1000.0),
    (STEAM_MARKER, 1.0),
    ("空气", 1.2),
    ("氧气", 1.43),
    ("天然气", 0.7),
    ("氨", 0.77),
    ("硫酸", 1840.0),
)


def is_steam(medium: str) -> bool:
    return STEAM_MARKER in (medium or "")


def steam_density(pressure_mpa: float) -> float:
    """Saturated steam density from a piecewise-linear fit on pressure."""
    for upper, slope, intercept in STEAM_SEGMENTS:
        if pressure_mpa < upper:
            return slope * pressure_mpa + intercept
    # Only reachable for NaN input.
    _, slope, intercept = STEAM_SEGMENTS[-1]
    return slope * pressure_mpa + intercept


def approximate_density(medium: str) -> float:
    medium = medium or ""
    for marker, value in DENSITY_BY_MARKER:
        if marker in medium:
            return value
    return DEFAULT_DENSITY


def density(medium: str, pressure_mpa: float) -> float:
    """Density used for mass flow: steam follows pressure, the rest are constants."""
    if is_steam(medium):
        return steam_density(pressure_mpa)
    return approximate_density(medium)
