"""Read CSV or Excel sources into rows of trimmed text cells."""

import csv
import io
import math
from pathlib import Path
from typing import IO, Any, Iterable, List, Union

import pandas as pd

from . import RunMetrics, logger

SUPPORTED_EXTENSIONS = (".xlsx", ".csv")


class SourceError(Exception):
    """Raised when the source table cannot be used at all."""


class UnsupportedFormatError(SourceError):
    """Raised for file extensions other than .xlsx and .csv."""


class EmptySourceError(SourceError):
    """Raised when the source contains no rows."""


class SourceReadError(SourceError):
    """Raised when the source file cannot be opened or parsed."""


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def _trim_trailing_empty(cells: List[str]) -> List[str]:
    end = len(cells)
    while end > 0 and cells[end - 1] == "":
        end -= 1
    return cells[:end]


def _csv_rows(lines: Iterable[str]) -> List[List[str]]:
    return [[cell.strip() for cell in row] for row in csv.reader(lines)]


def read_csv_rows(csv_path: Path) -> List[List[str]]:
    """Parse the file with ``csv.reader`` and trim every cell.

    Quoted cells may contain commas, e.g. ``"2.5MPa, 高"`` stays one cell.
    """

    with csv_path.open(newline="", encoding="utf-8-sig") as handle:
        return _csv_rows(handle)


def read_excel_rows(source: Union[Path, IO[bytes]]) -> List[List[str]]:
    """Read the first worksheet without treating any row as a header.

    Text such as "N/A" or "null" is kept literally; only blank cells are empty.
    Trailing empty cells are dropped so short rows keep their short length.
    """

    frame = pd.read_excel(
        source,
        sheet_name=0,
        header=None,
        dtype=object,
        engine="openpyxl",
        keep_default_na=False,
        na_filter=False,
    )
    return [
        _trim_trailing_empty([_cell_text(value) for value in values])
        for values in frame.itertuples(index=False, name=None)
    ]


def _check_extension(name: str) -> str:
    extension = Path(name).suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            f"Unsupported file format {extension or '(none)'}; expected .xlsx or .csv"
        )
    return extension


def _finish(rows: List[List[str]], label: str, metrics: RunMetrics | None) -> List[List[str]]:
    if not rows:
        raise EmptySourceError(f"Source table {label} is empty")
    logger.info("Read %s rows from %s", len(rows), label)
    if metrics:
        metrics.add_rows(len(rows))
    return rows


def load_table_rows(source_path: Path, metrics: RunMetrics | None = None) -> List[List[str]]:
    """Load a source table as a list of rows of trimmed strings.

    Args:
        source_path: Path to a ``.xlsx`` or ``.csv`` file.
        metrics: Optional metrics collector.

    Raises:
        UnsupportedFormatError: for any other extension.
        SourceReadError: when the file is missing or cannot be parsed.
        EmptySourceError: when the file holds no rows.
    """

    source_path = Path(source_path)
    extension = _check_extension(source_path.name)

    logger.info("Loading source table: %s", source_path)
    try:
        if extension == ".xlsx":
            rows = read_excel_rows(source_path)
        else:
            rows = read_csv_rows(source_path)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to read %s", source_path)
        raise SourceReadError(f"Failed to read {source_path}: {exc}") from exc

    return _finish(rows, str(source_path), metrics)


def load_uploaded_rows(
    filename: str, data: bytes, metrics: RunMetrics | None = None
) -> List[List[str]]:
    """Same as :func:`load_table_rows` for an in-memory upload."""

    extension = _check_extension(filename)
    try:
        if extension == ".xlsx":
            rows = read_excel_rows(io.BytesIO(data))
        else:
            rows = _csv_rows(io.StringIO(data.decode("utf-8-sig"), newline=""))
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to read upload %s", filename)
        raise SourceReadError(f"Failed to read {filename}: {exc}") from exc

    return _finish(rows, filename, metrics)
