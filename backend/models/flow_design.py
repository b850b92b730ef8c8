"""Pydantic schemas for the flow design API."""

from pydantic import BaseModel, Field


class FlowDesignRequest(BaseModel):
    """Raw table rows as produced by a spreadsheet or CSV reader."""

    rows: list[list[str]] = Field(
        ..., description="Rows of text cells: diameter (mm), medium, remark"
    )


class FlowDesignRecord(BaseModel):
    pipe_diameter_mm: float
    medium: str
    remark: str
    pressure_mpa: float
    recommended_velocity: float
    volume_flow_rate: float
    mass_flow_rate: float
    category: str
    recommendation: str
    density: float
    source_index: int | None = None


class SkippedRow(BaseModel):
    row_index: int
    kind: str
    detail: str = ""


class FlowDesignMeta(BaseModel):
    total_rows: int
    processed: int
    skipped: int
    header_skipped: bool


class FlowDesignResponse(BaseModel):
    headers: list[str]
    data: list[FlowDesignRecord]
    skipped_rows: list[SkippedRow]
    meta: FlowDesignMeta
