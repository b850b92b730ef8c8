"""Shared dependencies for FastAPI routes."""

from fastapi import Depends

from flowdesign import MediumResolver, ReferenceTable, RowProcessor, default_reference_table


def get_reference_table() -> ReferenceTable:
    """Return the process-wide, read-only reference table."""
    return default_reference_table()


def get_resolver(table: ReferenceTable = Depends(get_reference_table)) -> MediumResolver:
    return MediumResolver(table)


def get_row_processor(resolver: MediumResolver = Depends(get_resolver)) -> RowProcessor:
    return RowProcessor(resolver=resolver)
