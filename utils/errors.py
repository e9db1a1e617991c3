# utils/errors.py
from __future__ import annotations

from typing import Optional


class ExportError(Exception):
    """Base class for failures that abort an export run."""


class ConfigurationError(ExportError):
    """A required setting (the API token) is missing."""


class RemoteRequestError(ExportError):
    """
    An HTTP call to HubSpot failed: error status, timeout, connection
    problem or an undecodable body. Chained to the underlying requests error.
    """

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
