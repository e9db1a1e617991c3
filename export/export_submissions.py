# export/export_submissions.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from logging_setup import get_logger
from models import CONTACT_OBJECT_TYPE_ID, Form, OutputRow, Submission
from utils.api import HubSpotAPI
from utils.config import ExportConfig
from utils.dates import epoch_ms_to_iso8601
from utils.pagination import iter_submissions, list_forms, take_within_window
from export.workbook import write_workbook


@dataclass(frozen=True, slots=True)
class ExportResult:
    forms_total: int
    forms_matched: int
    row_count: int
    output_path: Optional[Path]  # None when nothing was written


def form_matches(form: Form, search_term: str) -> bool:
    """Case-insensitive substring match on the form name."""
    return search_term.lower() in (form.name or "").lower()


def extract_email(values: Optional[Iterable[Any]]) -> str:
    """
    Value of the first `email` property on the CRM contact object (0-1).
    Returns '' when there is none; a missing email never fails the run.
    """
    for v in values or ():
        if isinstance(v, Mapping):
            name, object_type_id, value = v.get("name"), v.get("objectTypeId"), v.get("value")
        else:
            name, object_type_id, value = v.name, v.object_type_id, v.value
        if name == "email" and object_type_id == CONTACT_OBJECT_TYPE_ID:
            return value or ""
    return ""


def properties_json(raw_values: Sequence[Dict[str, Any]]) -> str:
    """Compact JSON copy of the property list, kept for audit only."""
    return json.dumps(list(raw_values), separators=(",", ":"), ensure_ascii=False)


def map_submission_row(form: Form, submission: Submission) -> OutputRow:
    return OutputRow(
        form_id=form.id,
        form_name=form.name,
        submission_id=submission.conversion_id,
        submitted_at_iso=epoch_ms_to_iso8601(submission.submitted_at),
        contact_email=extract_email(submission.values),
        page_url=submission.page_url,
        all_properties_json=properties_json(submission.raw_values),
    )


def collect_rows(
    forms: Iterable[Form],
    api: HubSpotAPI,
    cutoff_ms: int,
    *,
    assume_newest_first: bool = True,
) -> List[OutputRow]:
    """
    Rows for every in-window submission of `forms`, in form order then
    submission order. Forms are processed strictly one after another.
    """
    rows: List[OutputRow] = []
    for form in forms:
        log = get_logger(step="submissions", form_id=form.id)
        before = len(rows)
        raw_subs = take_within_window(
            iter_submissions(api, form.id), cutoff_ms, assume_newest_first=assume_newest_first
        )
        for raw in raw_subs:
            rows.append(map_submission_row(form, Submission.from_api(raw)))
        log.info("collected submissions", extra={"form_name": form.name, "count": len(rows) - before})
    return rows


def export_submissions(
    config: ExportConfig,
    api: HubSpotAPI,
    output_path: Path,
    *,
    assume_newest_first: bool = True,
) -> ExportResult:
    """
    Export recent submissions of every form whose name contains the
    configured search term.

    - Lists all forms, filters by name, then pages through each form's
      submissions back to the cutoff.
    - Writes the workbook only once every request has succeeded; when no
      form matches or no submission is in window, nothing is written.
    """
    log = get_logger(step="export")

    log.info("fetching all forms")
    forms = [Form.from_api(f) for f in list_forms(api)]
    targets = [f for f in forms if form_matches(f, config.search_term)]

    if not targets:
        log.info(f'No forms found containing "{config.search_term}"', extra={"forms_total": len(forms)})
        return ExportResult(len(forms), 0, 0, None)

    log.info(
        f"Found {len(targets)} matching form(s). "
        f"Collecting submissions from the last {config.days_back} day(s)"
    )
    rows = collect_rows(targets, api, config.cutoff_ms, assume_newest_first=assume_newest_first)

    if not rows:
        log.info(f"No submissions in the last {config.days_back} day(s)")
        return ExportResult(len(forms), len(targets), 0, None)

    path = write_workbook(rows, Path(output_path))
    log.info(f"Export complete: {path} with {len(rows)} row(s)")
    return ExportResult(len(forms), len(targets), len(rows), path)
