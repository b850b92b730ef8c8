"""Reference medium schemas used by the API."""

from pydantic import BaseModel


class MediumEntry(BaseModel):
    """A reference medium with its design velocity range (m/s)."""

    name: str
    min_velocity: float
    max_velocity: float
    recommended_velocity: float
    category: str
    recommendation: str


class MediumResolution(BaseModel):
    query: str
    matched_name: str | None = None
    match_kind: str
    recommended_velocity: float
    category: str
    recommendation: str
