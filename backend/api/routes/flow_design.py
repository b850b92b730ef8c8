"""API routes that compute flow design reports from raw table rows."""

from dataclasses import asdict

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from backend.api.deps import get_row_processor
from backend.models.flow_design import (
    FlowDesignMeta,
    FlowDesignRecord,
    FlowDesignRequest,
    FlowDesignResponse,
    SkippedRow,
)
from flowdesign import REPORT_HEADERS, RowProcessor
from ingestion.report_writer import report_to_xlsx_bytes

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("", response_model=FlowDesignResponse)
def compute_flow_design(
    payload: FlowDesignRequest,
    processor: RowProcessor = Depends(get_row_processor),
) -> FlowDesignResponse:
    """Return one record per valid row; invalid rows are listed in ``skipped_rows``."""

    report = processor.process(payload.rows)
    return FlowDesignResponse(
        headers=REPORT_HEADERS,
        data=[FlowDesignRecord(**asdict(record)) for record in report.records],
        skipped_rows=[SkippedRow(**asdict(diag)) for diag in report.diagnostics],
        meta=FlowDesignMeta(
            total_rows=len(payload.rows),
            processed=len(report.records),
            skipped=report.skipped,
            header_skipped=report.header_skipped,
        ),
    )


@router.post("/report.xlsx")
def download_flow_design_report(
    payload: FlowDesignRequest,
    processor: RowProcessor = Depends(get_row_processor),
) -> Response:
    """Same computation as ``POST /flow-design`` rendered as an Excel workbook."""

    report = processor.process(payload.rows)
    return Response(
        content=report_to_xlsx_bytes(report.records),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="flow_design.xlsx"'},
    )
