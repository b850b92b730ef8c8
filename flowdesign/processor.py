"""Turn raw table rows into flow design result records."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .density import density
from .flow import mass_flow, volume_flow
from .medium_resolver import MediumResolver
from .reference_table import ReferenceTable
from .remark_parser import extract_pressure

logger = logging.getLogger(__name__)

HEADER_MARKERS = ("管径", "diameter")
MIN_CELLS = 3

REPORT_HEADERS = [
    "管径(mm)",
    "介质",
    "备注",
    "压力(MPa)",
    "推荐流速(m/s)",
    "体积流量(m³/h)",
    "质量流量(t/h)",
    "介质类别",
    "设计建议",
]

SKIP_TOO_FEW_CELLS = "too few cells"
SKIP_INVALID_DIAMETER = "invalid diameter"


class InvalidDiameterError(ValueError):
    """Raised when a diameter cell is not a positive number."""


@dataclass(frozen=True)
class InputRow:
    pipe_diameter_mm: float
    medium: str
    remark: str


@dataclass(frozen=True)
class ResultRecord:
    """One computed report line."""

    pipe_diameter_mm: float
    medium: str
    remark: str
    pressure_mpa: float
    recommended_velocity: float
    volume_flow_rate: float
    mass_flow_rate: float
    category: str
    recommendation: str
    density: float = 0.0
    source_index: Optional[int] = None

    def to_row(self) -> list:
        """Cells in ``REPORT_HEADERS`` order with the report's number formatting."""
        return [
            self.pipe_diameter_mm,
            self.medium,
            self.remark,
            f"{self.pressure_mpa:.3f}",
            f"{self.recommended_velocity:.2f}",
            f"{self.volume_flow_rate:.2f}",
            f"{self.mass_flow_rate:.2f}",
            self.category,
            self.recommendation,
        ]


@dataclass(frozen=True)
class RowDiagnostic:
    row_index: int
    kind: str
    detail: str = ""


@dataclass
class ProcessingReport:
    records: List[ResultRecord] = field(default_factory=list)
    diagnostics: List[RowDiagnostic] = field(default_factory=list)
    header_skipped: bool = False

    @property
    def skipped(self) -> int:
        return len(self.diagnostics)


def parse_diameter(text: str) -> float:
    """Parse a diameter cell such as ``"100"`` or ``"100mm"`` into millimetres."""

    cleaned = (text or "").strip()
    if not cleaned:
        raise InvalidDiameterError("empty diameter")
    cleaned = cleaned.replace("mm", "").replace("MM", "").strip()
    # Only plain ASCII numbers; float() would also accept full-width digits.
    if "_" in cleaned or not cleaned.isascii():
        raise InvalidDiameterError(f"not a number: {text!r}")
    try:
        value = float(cleaned)
    except ValueError as exc:
        raise InvalidDiameterError(f"not a number: {text!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidDiameterError(f"diameter must be a positive number: {text!r}")
    return value


def is_header_row(row: Sequence[str]) -> bool:
    if len(row) < MIN_CELLS:
        return False
    first = (row[0] or "").lower()
    return any(marker in first for marker in HEADER_MARKERS)


def parse_input_row(cells: Sequence[str]) -> InputRow:
    """Validate the first three cells of a raw row.

    Raises :class:`InvalidDiameterError` for a bad diameter and ``ValueError``
    when the row has fewer than three cells.
    """

    if len(cells) < MIN_CELLS:
        raise ValueError(f"expected at least {MIN_CELLS} cells, got {len(cells)}")
    diameter = parse_diameter(cells[0])
    return InputRow(diameter, (cells[1] or "").strip(), (cells[2] or "").strip())


def compute_record(
    row: InputRow, resolver: MediumResolver, source_index: Optional[int] = None
) -> ResultRecord:
    pressure = extract_pressure(row.remark)
    resolution = resolver.resolve(row.medium)
    volume = volume_flow(row.pipe_diameter_mm, resolution.velocity)
    rho = density(row.medium, pressure)
    return ResultRecord(
        pipe_diameter_mm=row.pipe_diameter_mm,
        medium=row.medium,
        remark=row.remark,
        pressure_mpa=pressure,
        recommended_velocity=resolution.velocity,
        volume_flow_rate=volume,
        mass_flow_rate=mass_flow(volume, rho),
        category=resolution.category,
        recommendation=resolution.recommendation,
        density=rho,
        source_index=source_index,
    )


class RowProcessor:
    """Single pass over source rows producing one record per valid row."""

    def __init__(
        self,
        resolver: MediumResolver | None = None,
        table: ReferenceTable | None = None,
    ):
        self.resolver = resolver if resolver is not None else MediumResolver(table)

    def process(self, rows: Iterable[Sequence[str]]) -> ProcessingReport:
        report = ProcessingReport()
        for index, cells in enumerate(rows):
            if index == 0 and is_header_row(cells):
                report.header_skipped = True
                continue
            if len(cells) < MIN_CELLS:
                report.diagnostics.append(
                    RowDiagnostic(index, SKIP_TOO_FEW_CELLS, f"{len(cells)} cells")
                )
                continue
            try:
                row = parse_input_row(cells)
            except InvalidDiameterError as exc:
                report.diagnostics.append(RowDiagnostic(index, SKIP_INVALID_DIAMETER, str(exc)))
                continue
            report.records.append(compute_record(row, self.resolver, source_index=index))

        logger.debug(
            "Processed %s records, skipped %s rows",
            len(report.records),
            report.skipped,
        )
        return report


def process_rows(
    rows: Iterable[Sequence[str]], table: ReferenceTable | None = None
) -> List[ResultRecord]:
    """Convenience wrapper returning only the result records."""
    return RowProcessor(table=table).process(rows).records
