"""Write flow design results to Excel or JSONL."""

import io
import json
import shutil
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from flowdesign import REPORT_HEADERS, ResultRecord

from . import RunMetrics, logger

RESULT_SHEET = "流量设计结果"


class ReportWriteError(Exception):
    """Raised when the report file cannot be saved."""


def ensure_xlsx_suffix(output_path: Path) -> Path:
    output_path = Path(output_path)
    if output_path.name.lower().endswith(".xlsx"):
        return output_path
    return output_path.with_name(output_path.name + ".xlsx")


def records_to_frame(records: Iterable[ResultRecord]) -> pd.DataFrame:
    """Build a frame with the report headers and formatted cells."""
    return pd.DataFrame([record.to_row() for record in records], columns=REPORT_HEADERS)


def write_report_xlsx(
    records: Sequence[ResultRecord],
    output_path: Path,
    metrics: RunMetrics | None = None,
    sheet_name: str = RESULT_SHEET,
    source_workbook: Path | None = None,
) -> Path:
    """Save the result records to an .xlsx workbook and return the final path.

    With ``source_workbook`` the report is a copy of that workbook with the
    result sheet added (or replaced), so the input sheets are kept.
    """

    output_path = ensure_xlsx_suffix(output_path)
    frame = records_to_frame(records)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if source_workbook is None:
            with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
                frame.to_excel(writer, sheet_name=sheet_name, index=False)
        else:
            source_workbook = Path(source_workbook)
            if source_workbook.resolve() != output_path.resolve():
                shutil.copyfile(source_workbook, output_path)
            with pd.ExcelWriter(
                output_path, engine="openpyxl", mode="a", if_sheet_exists="replace"
            ) as writer:
                frame.to_excel(writer, sheet_name=sheet_name, index=False)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to save report %s", output_path)
        raise ReportWriteError(f"Failed to save report {output_path}: {exc}") from exc

    logger.info("Wrote %s result rows to %s", len(frame), output_path)
    if metrics:
        metrics.increment_extra("xlsx_reports")
    return output_path


def write_staging_jsonl(records: Iterable[ResultRecord], output_path: Path) -> None:
    """Write raw (unformatted) result records as JSON lines."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with output_path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(json.dumps(asdict(record), ensure_ascii=False) + "\n")
            count += 1
    logger.info("Wrote %s records to %s", count, output_path)


def report_to_xlsx_bytes(records: Sequence[ResultRecord], sheet_name: str = RESULT_SHEET) -> bytes:
    """Render the workbook in memory, e.g. for an HTTP download."""

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        records_to_frame(records).to_excel(writer, sheet_name=sheet_name, index=False)
    return buffer.getvalue()
