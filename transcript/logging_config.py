"""
Logging for the transcript engine.

Each dispatched command runs inside command_scope(), which records the
command name and a short correlation id in a ContextVar. CommandContextFilter
copies both onto every log record emitted while the command runs, so store
engines can log without knowing which command called them.

Usage:
    from transcript.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Class added", extra={"class_name": name})
"""

import json
import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Iterator, NamedTuple, Optional

if TYPE_CHECKING:
    from transcript.config import Settings


class CommandContext(NamedTuple):
    command_id: str
    command: str


_command_context: ContextVar[Optional[CommandContext]] = ContextVar("command_context", default=None)

# LogRecord attributes that are never copied into JSON output
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName", "command_id", "command_tag",
))


@contextmanager
def command_scope(command: str, command_id: Optional[str] = None) -> Iterator[CommandContext]:
    """Bind a command name and correlation id for the duration of the block."""
    context = CommandContext(command_id or uuid.uuid4().hex[:12], command)
    token = _command_context.set(context)
    try:
        yield context
    finally:
        _command_context.reset(token)


def get_command_context() -> Optional[CommandContext]:
    return _command_context.get()


def get_command_id() -> Optional[str]:
    """Correlation id of the running command, if any."""
    context = _command_context.get()
    return context.command_id if context else None


class CommandContextFilter(logging.Filter):
    """Adds command_id and a printable command_tag to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _command_context.get()
        if context is None:
            record.command_id = "-"  # type: ignore[attr-defined]
            record.command_tag = "-"  # type: ignore[attr-defined]
        else:
            record.command_id = context.command_id  # type: ignore[attr-defined]
            record.command_tag = f"{context.command}:{context.command_id}"  # type: ignore[attr-defined]
        return True


def _jsonable(value: Any) -> Any:
    """Account ids are opaque hashables; render anything json rejects as text."""
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per line for production log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        cmd_id = getattr(record, "command_id", None)
        if cmd_id and cmd_id != "-":
            log_obj["command_id"] = cmd_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # extra= fields from the log call
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and value is not None:
                log_obj[key] = _jsonable(value)

        return json.dumps(log_obj)


def _create_dev_formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] (%(command_tag)s) %(message)s",
        datefmt="%H:%M:%S",
    )


def configure_logging(
    *,
    log_level: str = "INFO",
    environment: str = "development",
    debug: bool = False,
) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: 'production' writes JSON lines, anything else is human-readable
        debug: If True, use DEBUG level regardless of log_level
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # Reconfiguring replaces the previous handler
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(CommandContextFilter())

    if environment == "production":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(_create_dev_formatter())

    root.addHandler(handler)


def configure_from_settings(settings: "Settings") -> None:
    """configure_logging() driven by the log_level, environment and debug settings."""
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
