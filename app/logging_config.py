"""
Structured logging

Every record is stamped with the request id, organization and user of the
request being served (set by ``RequestLoggingMiddleware``). Production and
staging emit one JSON object per line; development gets a compact text line.

Citizen reports and billing rows carry contact details and Stripe keys, so
messages pass through ``mask_pii`` before they are written.
"""

import json
import logging
import re
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict

from app.config import settings

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
organization_id_ctx: ContextVar[str] = ContextVar("organization_id", default="-")
user_id_ctx: ContextVar[str] = ContextVar("user_id", default="-")

_CONTEXT_FIELDS = (
    ("request_id", request_id_ctx),
    ("organization_id", organization_id_ctx),
    ("user_id", user_id_ctx),
)

NOISY_LOGGERS = ("uvicorn.access", "httpcore", "httpx", "urllib3", "asyncio", "sqlalchemy.engine")


def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]


def log_context() -> Dict[str, str]:
    """Current request context; unset values are omitted."""
    return {name: var.get() for name, var in _CONTEXT_FIELDS if var.get() != "-"}


# ── PII masking ──

_EMAIL = re.compile(r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b")
_PHONE = re.compile(r"(?<!\d)(?:\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?(\d{4})(?!\d)")
_SECRETS = (
    (re.compile(r'("?(?:password|token|secret|stripe_secret_key|authorization)"?\s*[:=]\s*)"[^"]*"', re.I),
     r'\1"***"'),
    (re.compile(r"\b(Bearer\s+)[A-Za-z0-9._-]+", re.I), r"\1***"),
    (re.compile(r"\b((?:sk|rk)_(?:live|test)_)[A-Za-z0-9]+"), r"\1***"),
)


def mask_pii(text: str) -> str:
    """Redact credentials, then shorten emails and phone numbers."""
    for pattern, replacement in _SECRETS:
        text = pattern.sub(replacement, text)
    text = _EMAIL.sub(r"\1***@\2", text)
    return _PHONE.sub(r"***-\1", text)


# ── Formatters ──

class ContextFilter(logging.Filter):
    """Copies the request context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, var in _CONTEXT_FIELDS:
            setattr(record, name, var.get())
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": mask_pii(record.getMessage()),
        }
        for name, _ in _CONTEXT_FIELDS:
            value = getattr(record, name, "-")
            if value != "-":
                entry[name] = value
        if record.exc_info and record.exc_info[1]:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(request_id)s org=%(organization_id)s] %(message)s"

    def __init__(self):
        super().__init__(self.FORMAT, datefmt="%H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.message = mask_pii(record.message)
        return super().formatMessage(record)


def setup_logging() -> None:
    """Install the stdout handler on the root logger (idempotent)."""
    root = logging.getLogger()
    root.handlers.clear()

    structured = settings.is_production or settings.is_staging
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JSONFormatter() if structured else HumanFormatter())
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL.upper() if settings.LOG_LEVEL else (logging.INFO if structured else logging.DEBUG))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
