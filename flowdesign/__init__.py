"""Pipe flow design engine: medium lookup, pressure, density and flow rates."""

from .density import approximate_density, density, is_steam, steam_density
from .flow import mass_flow, pipe_area, volume_flow
from .medium_resolver import MediumResolver, Resolution
from .processor import (
    REPORT_HEADERS,
    InputRow,
    InvalidDiameterError,
    ProcessingReport,
    ResultRecord,
    RowDiagnostic,
    RowProcessor,
    is_header_row,
    parse_diameter,
    process_rows,
)
from .reference_table import ReferenceTable, VelocityEntry, default_reference_table
from .remark_parser import extract_pressure

__all__ = [
    "REPORT_HEADERS",
    "InputRow",
    "InvalidDiameterError",
    "MediumResolver",
    "ProcessingReport",
    "ReferenceTable",
    "Resolution",
    "ResultRecord",
    "RowDiagnostic",
    "RowProcessor",
    "VelocityEntry",
    "approximate_density",
    "default_reference_table",
    "density",
    "extract_pressure",
    "is_header_row",
    "is_steam",
    "mass_flow",
    "parse_diameter",
    "pipe_area",
    "process_rows",
    "steam_density",
    "volume_flow",
]
