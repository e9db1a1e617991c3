# utils/api.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from utils.errors import RemoteRequestError

# --- Tunables ---------------------------------------------------------------
DEFAULT_BASE_URL = "https://api.hubapi.com"
DEFAULT_TIMEOUT: float = 10  # seconds, per request
USER_AGENT = "HubSpotFormExport/1.0 (+https://example.org)"  # customize

log = logging.getLogger(__name__)


class HubSpotAPI:
    """
    Minimal HubSpot REST client.

    One bearer-authenticated session, a fixed timeout and no retries: any
    failure surfaces as RemoteRequestError so batch runs fail loudly.
    """

    def __init__(self, token: str | None, base_url: str = DEFAULT_BASE_URL,
                 timeout: float = DEFAULT_TIMEOUT) -> None:
        if not token:
            raise ValueError("HubSpotAPI token is required (check your .env)")

        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        })

    def _full_url(self, endpoint: str) -> str:
        ep = (endpoint or "").strip().lstrip("/")
        return urljoin(self.base_url, ep)

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            return resp
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            log.error("HTTP %s from %s %s", status, method, url, extra={"url": url})
            raise RemoteRequestError(f"{method} {url} failed with HTTP {status}",
                                     url=url, status_code=status) from e
        except requests.RequestException as e:
            log.error("%s on %s %s", type(e).__name__, method, url, extra={"url": url})
            raise RemoteRequestError(f"{method} {url} failed: {e}", url=url) from e

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a single page and return the decoded JSON object."""
        url = self._full_url(endpoint)
        # requests drops params whose value is None
        r = self._request("GET", url, params=params)
        log.debug("GET %s -> %s", r.url, r.status_code)
        try:
            data = r.json()
        except ValueError as e:
            raise RemoteRequestError(f"GET {url} returned a non-JSON body",
                                     url=url, status_code=r.status_code) from e
        if not isinstance(data, dict):
            raise RemoteRequestError(f"GET {url} returned {type(data).__name__}, expected an object",
                                     url=url, status_code=r.status_code)
        return data


__all__ = [
    "HubSpotAPI",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
]
