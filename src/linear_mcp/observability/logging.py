"""Logging setup for the Linear MCP server.

All output goes to stderr; stdout belongs to the MCP stdio stream. Each tool
call runs inside a log context (tool name and request id) that both
formatters append to every record, and Linear API keys are masked before a
record is written.
"""

import json
import logging
import re
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, Optional

# Context field name -> short label used by the human-readable formatter
CONTEXT_LABELS = {"tool_name": "tool", "request_id": "req"}

_log_context: ContextVar[Dict[str, str]] = ContextVar("linear_log_context", default={})

_API_KEY_PATTERN = re.compile(r"\blin_(api|oauth)_[A-Za-z0-9]+")


def set_log_context(
    tool_name: Optional[str] = None,
    request_id: Optional[str] = None,
):
    """Set contextual logging fields for the current async context."""
    fields = dict(_log_context.get())
    if tool_name is not None:
        fields["tool_name"] = tool_name
    if request_id is not None:
        fields["request_id"] = request_id
    _log_context.set(fields)


def clear_log_context():
    _log_context.set({})


def get_log_context() -> Dict[str, str]:
    return dict(_log_context.get())


@contextmanager
def log_context(**fields: str) -> Iterator[None]:
    """Scope extra context fields to a block, restoring the previous ones after."""
    token = _log_context.set({**_log_context.get(), **fields})
    try:
        yield
    finally:
        _log_context.reset(token)


def redact(text: str) -> str:
    """Mask Linear API keys and OAuth tokens, keeping their prefix."""
    return _API_KEY_PATTERN.sub(lambda m: f"lin_{m.group(1)}_***", text)


class RedactingFilter(logging.Filter):
    """Rewrites the record message so secrets never reach a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, context fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(_log_context.get())

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = redact(self.formatException(record.exc_info))

        return json.dumps(log_entry)


class HumanReadableFormatter(logging.Formatter):
    """Single-line development format: ``[time] LEVEL logger: message [tool=...]``."""

    def format(self, record: logging.LogRecord) -> str:
        msg = " ".join([
            f"[{self.formatTime(record, self.datefmt)}]",
            f"{record.levelname:8s}",
            f"{record.name}:",
            record.getMessage(),
        ])

        context = _log_context.get()
        ctx_parts = [
            f"{CONTEXT_LABELS.get(key, key)}={value}"
            for key, value in context.items()
            if value
        ]
        if ctx_parts:
            msg += f" [{', '.join(ctx_parts)}]"

        if record.exc_info and record.exc_info[1]:
            msg += "\n" + redact(self.formatException(record.exc_info))

        return msg


def configure_logging(environment: str = "development", log_level: str = "INFO"):
    """Install the stderr handler on the root logger.

    Args:
        environment: "production" for JSON output, anything else for human-readable.
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(RedactingFilter())
    if environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)

    # Request bodies carry the Authorization header at DEBUG
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
