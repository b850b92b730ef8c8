#!/usr/bin/env python3
"""Generate a pipe flow design report from a CSV or Excel table.

Each input row holds a pipe diameter (mm), a medium name and a free-text
remark. The report lists pressure, recommended velocity, volume flow, mass
flow, medium category and a design recommendation for every valid row.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from flowdesign import RowProcessor
from ingestion import RunMetrics, logger
from ingestion.report_writer import ReportWriteError, write_report_xlsx, write_staging_jsonl
from ingestion.table_loader import SourceError, load_table_rows


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute recommended velocity and flow rates for each pipe row."
    )
    parser.add_argument('input', help='Source table (.xlsx or .csv)')
    parser.add_argument(
        '--output', default=None,
        help='Destination workbook (default: <input>_流量设计结果.xlsx next to the input)'
    )
    parser.add_argument(
        '--jsonl', default=None,
        help='Optional JSONL file receiving the unformatted result records'
    )
    parser.add_argument(
        '--quiet', action='store_true',
        help='Only log warnings and errors'
    )
    return parser.parse_args(argv)


def default_output_path(input_path: Path) -> Path:
    return input_path.with_name(f"{input_path.stem}_流量设计结果.xlsx")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else default_output_path(input_path)
    metrics = RunMetrics()

    try:
        rows = load_table_rows(input_path, metrics=metrics)
    except SourceError as exc:
        logger.error("%s", exc)
        return 1

    report = RowProcessor().process(rows)
    metrics.add_processed(len(report.records))
    metrics.add_skipped(report.skipped)
    for diagnostic in report.diagnostics:
        logger.debug("Skipped row %s: %s (%s)", diagnostic.row_index + 1, diagnostic.kind, diagnostic.detail)

    # Excel input keeps its own sheets next to the results.
    source_workbook = input_path if input_path.suffix.lower() == ".xlsx" else None
    try:
        saved = write_report_xlsx(
            report.records, output_path, metrics=metrics, source_workbook=source_workbook
        )
    except ReportWriteError as exc:
        logger.error("%s", exc)
        return 1

    if args.jsonl:
        write_staging_jsonl(report.records, Path(args.jsonl))

    logger.info(
        "Rows read=%s, processed=%s, skipped=%s",
        metrics.rows_read, metrics.rows_processed, metrics.rows_skipped,
    )
    print(f"处理完成，结果已保存到: {saved}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
