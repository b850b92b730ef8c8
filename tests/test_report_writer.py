import io
import json

from openpyxl import Workbook, load_workbook

from flowdesign import REPORT_HEADERS, process_rows
from ingestion import RunMetrics
from ingestion.report_writer import (
    RESULT_SHEET,
    ensure_xlsx_suffix,
    report_to_xlsx_bytes,
    write_report_xlsx,
    write_staging_jsonl,
)


def _records():
    return process_rows(
        [["管径(mm)", "介质", "备注"], ["100", "自来水", "常温常压"], ["50", "饱和蒸汽", "0.5MPa"]]
    )


def test_ensure_xlsx_suffix(tmp_path):
    assert ensure_xlsx_suffix(tmp_path / "out") == tmp_path / "out.xlsx"
    assert ensure_xlsx_suffix(tmp_path / "out.XLSX") == tmp_path / "out.XLSX"
    assert ensure_xlsx_suffix(tmp_path / "out.csv") == tmp_path / "out.csv.xlsx"


def test_write_report_xlsx(tmp_path):
    metrics = RunMetrics()
    saved = write_report_xlsx(_records(), tmp_path / "reports" / "result", metrics=metrics)

    assert saved == tmp_path / "reports" / "result.xlsx"
    assert saved.exists()
    assert metrics.extra["xlsx_reports"] == 1

    sheet = load_workbook(saved)[RESULT_SHEET]
    rows = list(sheet.iter_rows(values_only=True))
    assert list(rows[0]) == REPORT_HEADERS
    assert len(rows) == 3
    first = rows[1]
    assert first[0] == 100
    assert first[1:] == (
        "自来水",
        "常温常压",
        "0.500",
        "1.25",
        "35.34",
        "35.34",
        "水及水溶液",
        "防噪音要求≤1.2m/s",
    )
    assert rows[2][7] == "蒸汽系统"


def test_report_to_xlsx_bytes():
    data = report_to_xlsx_bytes(_records())
    sheet = load_workbook(io.BytesIO(data))[RESULT_SHEET]
    assert sheet.max_row == 3


def test_write_staging_jsonl(tmp_path):
    out = tmp_path / "staging" / "out.jsonl"
    write_staging_jsonl(_records(), out)
    lines = out.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["medium"] == "自来水"
    assert first["source_index"] == 1
    assert first["density"] == 1000


def test_write_report_replaces_existing_result_sheet(tmp_path):
    source = tmp_path / "source.xlsx"
    workbook = Workbook()
    workbook.active.title = "data"
    workbook.create_sheet(RESULT_SHEET).append(["stale"])
    workbook.save(source)

    saved = write_report_xlsx(_records(), tmp_path / "out.xlsx", source_workbook=source)

    result = load_workbook(saved)
    assert result.sheetnames == ["data", RESULT_SHEET]
    assert result[RESULT_SHEET]["A1"].value == REPORT_HEADERS[0]
    assert result[RESULT_SHEET].max_row == 3
