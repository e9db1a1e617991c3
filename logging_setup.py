# logging_setup.py
from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict

LOGGER_NAME = "form_export"

# Context every exporter line carries: which pipeline step, which form.
CONTEXT_FIELDS = ("step", "form_id")

# Attributes logging itself puts on a record; user extras may not reuse them.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("x", logging.INFO, __file__, 0, "", (), None).__dict__
) | {"message", "asctime"}


class DefaultContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True


class ExtrasFormatter(logging.Formatter):
    """
    Appends `extra=` fields as key=value pairs, so counts, paths and
    submission ids show up in the console line:

        ... [submissions] form=3f1c... collected submissions count=12
    """

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: v for k, v in record.__dict__.items()
        if k not in _RECORD_ATTRS and k not in CONTEXT_FIELDS and not k.startswith("_")
    }


def setup_logging(verbosity: int = 1) -> None:
    """
    Console logging for an export run: INFO by default, DEBUG from -vv.
    """
    level = logging.DEBUG if verbosity >= 2 else logging.INFO

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "export": {
                "()": "logging_setup.ExtrasFormatter",
                "fmt": "%(asctime)s %(levelname)s [%(step)s] form=%(form_id)s %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "filters": {"context": {"()": "logging_setup.DefaultContextFilter"}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "export",
                "level": level,
                "filters": ["context"],
            }
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["console"], "level": level, "propagate": False}
        },
    })


class _StepAdapter(logging.LoggerAdapter):
    """Binds step/form_id; extras that clash with LogRecord attributes get a meta_ prefix."""

    def process(self, msg: str, kwargs):
        extra = dict(self.extra)
        for k, v in (kwargs.get("extra") or {}).items():
            key = f"meta_{k}" if k in _RECORD_ATTRS else k
            extra.setdefault(key, v)  # bound context wins
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(*, step: str, form_id: str = "-") -> logging.LoggerAdapter:
    """
    Logger for one pipeline step, optionally bound to a form:
        log = get_logger(step="submissions", form_id=form.id)
        log.info("collected submissions", extra={"count": 12})
    """
    return _StepAdapter(logging.getLogger(LOGGER_NAME), {"step": step, "form_id": form_id})
