"""Logging setup. Generated identity values never reach the logs, only indices and counts do."""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Mapping
from typing import Any

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
REDACTED = "[REDACTED]"

# Synthetic identity fields of Profile / RawRecord
IDENTITY_FIELDS = frozenset({"first_name", "last_name", "email", "phone", "login"})
_IDENTITY_VALUE = re.compile(
    r"\b((?:" + "|".join(sorted(IDENTITY_FIELDS)) + r")s?)"
    r"[\s=:]+(?!\[REDACTED\])[^\s,\)\]]+",
    re.IGNORECASE,
)


def redact_text(text: str) -> str:
    """`email=a@b.c` / `phone: +7...` become `email=[REDACTED]` / `phone=[REDACTED]`."""
    return _IDENTITY_VALUE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def redact_mapping(values: Mapping[str, Any]) -> dict[str, Any]:
    return {
        k: REDACTED if k.lower().rstrip("s") in IDENTITY_FIELDS else v for k, v in values.items()
    }


def _redact_arg(arg: Any) -> Any:
    return redact_mapping(arg) if isinstance(arg, Mapping) else arg


class IdentityRedactionFilter(logging.Filter):
    """
    Redacts identity fields from the formatted message (records passed as dicts too).
    The record leaves with the final text in `msg` and no args.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if isinstance(args, Mapping):
            record.args = redact_mapping(args)
        elif args:
            record.args = tuple(_redact_arg(a) for a in args)
        try:
            message = record.getMessage()
        except (TypeError, ValueError, KeyError):
            # left for the handler to report via handleError
            return True
        record.msg = redact_text(message)
        record.args = None
        return True


def setup_logging(log_level: str = "INFO") -> None:
    """Root logger to stdout; every root handler redacts, whichever logger emitted the record."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%SZ",
        stream=sys.stdout,
        force=True,
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, IdentityRedactionFilter) for f in handler.filters):
            handler.addFilter(IdentityRedactionFilter())
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
