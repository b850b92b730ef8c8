import pytest
from openpyxl import Workbook

from flowdesign import process_rows
from ingestion import RunMetrics
from ingestion.table_loader import (
    EmptySourceError,
    SourceReadError,
    UnsupportedFormatError,
    load_table_rows,
    load_uploaded_rows,
)


class DummyMetrics:
    def __init__(self):
        self.rows = 0

    def add_rows(self, n: int) -> None:
        self.rows += n


def test_load_csv_rows_trims_cells(tmp_path):
    csv_path = tmp_path / "pipes.csv"
    csv_path.write_text(
        "\ufeff管径(mm), 介质 ,备注\n100 ,自来水, 常温常压\n80mm,饱和蒸汽,0.5MPa\n",
        encoding="utf-8",
    )

    metrics = DummyMetrics()
    rows = load_table_rows(csv_path, metrics=metrics)

    assert rows == [
        ["管径(mm)", "介质", "备注"],
        ["100", "自来水", "常温常压"],
        ["80mm", "饱和蒸汽", "0.5MPa"],
    ]
    assert metrics.rows == 3


def test_load_xlsx_reads_first_sheet(tmp_path):
    xlsx_path = tmp_path / "pipes.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["管径(mm)", "介质", "备注"])
    sheet.append([100, "自来水", "常温常压"])
    sheet.append([65.5, "压缩空气", "8bar"])
    sheet.append([80, "热水"])
    workbook.create_sheet("other").append(["ignored"])
    workbook.save(xlsx_path)

    metrics = RunMetrics()
    rows = load_table_rows(xlsx_path, metrics=metrics)

    assert rows[0] == ["管径(mm)", "介质", "备注"]
    assert rows[1] == ["100", "自来水", "常温常压"]
    assert rows[2] == ["65.5", "压缩空气", "8bar"]
    # trailing empty cells are dropped, so the short row stays short
    assert rows[3] == ["80", "热水"]
    assert metrics.rows_read == 4


def test_unsupported_extension(tmp_path):
    path = tmp_path / "pipes.txt"
    path.write_text("100,自来水,\n", encoding="utf-8")
    with pytest.raises(UnsupportedFormatError):
        load_table_rows(path)


def test_missing_file_is_read_error(tmp_path):
    with pytest.raises(SourceReadError):
        load_table_rows(tmp_path / "missing.csv")


def test_corrupt_xlsx_is_read_error(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a workbook")
    with pytest.raises(SourceReadError):
        load_table_rows(path)


def test_empty_csv(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(EmptySourceError):
        load_table_rows(path)


def test_load_uploaded_csv():
    rows = load_uploaded_rows("upload.CSV", "100,自来水,常温\n".encode("utf-8"))
    assert rows == [["100", "自来水", "常温"]]


def test_load_uploaded_rejects_other_formats():
    with pytest.raises(UnsupportedFormatError):
        load_uploaded_rows("upload.xls", b"")


def test_xlsx_keeps_literal_na_text(tmp_path):
    xlsx_path = tmp_path / "na.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["100", "自来水", "N/A"])
    sheet.append(["80", "NA", "None"])
    sheet.append(["65", "热水", "null"])
    workbook.save(xlsx_path)

    rows = load_table_rows(xlsx_path)

    assert rows == [
        ["100", "自来水", "N/A"],
        ["80", "NA", "None"],
        ["65", "热水", "null"],
    ]
    records = process_rows(rows)
    assert [r.medium for r in records] == ["自来水", "NA", "热水"]
    assert [r.remark for r in records] == ["N/A", "None", "null"]


def test_csv_quoted_cell_keeps_commas(tmp_path):
    csv_path = tmp_path / "quoted.csv"
    csv_path.write_text('100,自来水,"2.5MPa, 高"\n', encoding="utf-8")
    assert load_table_rows(csv_path) == [["100", "自来水", "2.5MPa, 高"]]
