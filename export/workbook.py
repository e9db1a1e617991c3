# export/workbook.py
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Iterable, List

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from logging_setup import get_logger
from models import COLUMNS, OutputRow
from utils.fs import atomic_write

SHEET_NAME = "Submissions"

# Excel's per-cell text limit; openpyxl cuts longer strings silently.
MAX_CELL_CHARS = 32_767


def clean_cells(row: OutputRow) -> List[str]:
    """
    Cell values ready for openpyxl.

    - Control characters XML cannot carry (\\x00-\\x08, \\x0b, \\x0c,
      \\x0e-\\x1f) are dropped.
    - Over-long values are kept as-is and flagged; openpyxl truncates them.
    """
    log = get_logger(step="workbook", form_id=row.form_id)
    cells = []
    for column, value in zip(COLUMNS, row.as_cells()):
        text = value or ""
        cleaned = ILLEGAL_CHARACTERS_RE.sub("", text)
        if cleaned != text:
            log.warning(
                "dropped control characters",
                extra={"column": column, "submission_id": row.submission_id,
                       "removed": len(text) - len(cleaned)},
            )
        if len(cleaned) > MAX_CELL_CHARS:
            log.warning(
                "cell exceeds Excel limit and will be truncated",
                extra={"column": column, "submission_id": row.submission_id,
                       "length": len(cleaned), "limit": MAX_CELL_CHARS},
            )
        cells.append(cleaned)
    return cells


def build_workbook(rows: Iterable[OutputRow], *, sheet_name: str = SHEET_NAME) -> Workbook:
    """One sheet: header row in COLUMNS order, then one line per row."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(list(COLUMNS))
    for row in rows:
        ws.append(clean_cells(row))
    return wb


def write_workbook(rows: Iterable[OutputRow], path: Path, *, sheet_name: str = SHEET_NAME) -> Path:
    """
    Serialize rows to an .xlsx file at `path`.

    - The workbook is rendered in memory, then written atomically;
      an existing file is overwritten without asking.
    - Returns the path written.
    """
    log = get_logger(step="workbook")
    path = Path(path)

    wb = build_workbook(rows, sheet_name=sheet_name)
    buf = BytesIO()
    wb.save(buf)
    atomic_write(path, buf.getvalue())

    log.info("wrote workbook", extra={"path": str(path), "rows": wb[sheet_name].max_row - 1})
    return path
