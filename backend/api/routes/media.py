"""API routes for the medium reference table."""

from fastapi import APIRouter, Depends, Query

from backend.api.deps import get_reference_table, get_resolver
from backend.models.medium import MediumEntry, MediumResolution
from flowdesign import MediumResolver, ReferenceTable

router = APIRouter()


@router.get("/", response_model=list[MediumEntry])
def list_media(
    category: str | None = Query(None, description="Only include media of this category"),
    table: ReferenceTable = Depends(get_reference_table),
) -> list[MediumEntry]:
    """List reference media in declaration order."""

    return [
        MediumEntry(
            name=name,
            min_velocity=entry.min_velocity,
            max_velocity=entry.max_velocity,
            recommended_velocity=entry.midpoint,
            category=entry.category,
            recommendation=entry.recommendation,
        )
        for name, entry in table.items()
        if category is None or entry.category == category
    ]


@router.get("/categories", response_model=list[str])
def list_categories(table: ReferenceTable = Depends(get_reference_table)) -> list[str]:
    return table.categories()


@router.get("/resolve", response_model=MediumResolution)
def resolve_medium(
    name: str = Query(..., description="Free-text medium name"),
    resolver: MediumResolver = Depends(get_resolver),
) -> MediumResolution:
    resolution = resolver.resolve(name)
    return MediumResolution(
        query=name,
        matched_name=resolution.matched_name,
        match_kind=resolution.match_kind,
        recommended_velocity=resolution.velocity,
        category=resolution.category,
        recommendation=resolution.recommendation,
    )
