# utils/pagination.py
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from logging_setup import get_logger
from utils.api import HubSpotAPI

FORMS_ENDPOINT = "marketing/v3/forms"
SUBMISSIONS_ENDPOINT = "form-integrations/v1/submissions/forms/{form_id}"

FORMS_PAGE_SIZE = 100
SUBMISSIONS_PAGE_SIZE = 50  # kept small for rate limits

NextToken = Callable[[Dict[str, Any]], Optional[Any]]


def iter_pages(
    api: HubSpotAPI,
    endpoint: str,
    *,
    params: Dict[str, Any],
    next_token: NextToken,
    token_param: str,
    first_token: Any = None,
) -> Iterator[List[Dict[str, Any]]]:
    """
    Yield the `results` list of each page, one request at a time.

    `next_token(body)` returns the cursor for the following page, or a falsy
    value when the listing is exhausted. The cursor is sent as `token_param`.
    """
    token = first_token
    while True:
        page_params = dict(params)
        if token is not None:
            page_params[token_param] = token
        body = api.get(endpoint, params=page_params)
        yield list(body.get("results") or [])

        token = next_token(body)
        if not token:
            return


def _forms_cursor(body: Dict[str, Any]) -> Optional[str]:
    return ((body.get("paging") or {}).get("next") or {}).get("after")


def _submissions_offset(body: Dict[str, Any]) -> Optional[int]:
    # HubSpot reports 0 (or nothing) once there is no next page
    return body.get("offset") or None


def iter_forms(api: HubSpotAPI, *, page_size: int = FORMS_PAGE_SIZE) -> Iterator[Dict[str, Any]]:
    """Every form in the portal, in API order (cursor pagination via `after`)."""
    for page in iter_pages(
        api, FORMS_ENDPOINT,
        params={"limit": page_size},
        next_token=_forms_cursor,
        token_param="after",
    ):
        yield from page


def list_forms(api: HubSpotAPI, *, page_size: int = FORMS_PAGE_SIZE) -> List[Dict[str, Any]]:
    """
    Collect the complete form list. Any request failure propagates, so
    callers never see a partial listing.
    """
    log = get_logger(step="forms")
    forms = list(iter_forms(api, page_size=page_size))
    log.debug("listed forms", extra={"count": len(forms)})
    return forms


def iter_submissions(
    api: HubSpotAPI, form_id: str, *, page_size: int = SUBMISSIONS_PAGE_SIZE
) -> Iterator[Dict[str, Any]]:
    """
    Raw submissions for one form, newest first (offset pagination).

    Single pass: every call starts over at offset 0.
    """
    log = get_logger(step="submissions", form_id=form_id)
    for n, page in enumerate(iter_pages(
        api, SUBMISSIONS_ENDPOINT.format(form_id=form_id),
        params={"limit": page_size},
        next_token=_submissions_offset,
        token_param="offset",
        first_token=0,
    ), start=1):
        log.debug("fetched submissions page", extra={"page": n, "count": len(page)})
        yield from page


def take_within_window(
    submissions: Iterable[Dict[str, Any]],
    cutoff_ms: int,
    *,
    assume_newest_first: bool = True,
) -> Iterator[Dict[str, Any]]:
    """
    Keep submissions with submittedAt >= cutoff_ms.

    With assume_newest_first the first stale submission ends consumption,
    so no further pages are requested. Otherwise everything is scanned and
    filtered, which is safe when the API order cannot be trusted.
    """
    for sub in submissions:
        if int(sub["submittedAt"]) >= cutoff_ms:
            yield sub
        elif assume_newest_first:
            return
