"""Logging configuration."""
import datetime
import inspect
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, List

import structlog
from structlog.types import Processor, EventDict

STDERR_LOG_LEVEL = "INFO"
IGNORED_LOGGERS = [
    "aiohttp",
    "asyncio"
]

def add_timestamp(_, __, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to the event dict."""
    if 'timestamp' not in event_dict:
        event_dict['timestamp'] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return event_dict

def is_logging_frame(filename: str) -> bool:
    """Frames belonging to structlog, stdlib logging or this module."""
    if filename == __file__ or filename == logging.__file__:
        return True
    parts = set(Path(filename).parts)
    return "structlog" in parts or "logging" in parts

def add_caller_info(logger: Any, name: str, event_dict: EventDict) -> EventDict:
    """Add the call site of the log statement to the event dict."""
    frame = inspect.currentframe()
    if frame is not None:
        caller = frame.f_back
        while caller and is_logging_frame(caller.f_code.co_filename):
            caller = caller.f_back
        if caller:
            event_dict.update({
                "module": caller.f_code.co_name,
                "line": caller.f_lineno,
                "file": os.path.basename(caller.f_code.co_filename)
            })
    return event_dict

def level_filter(logger: Any, name: str, event_dict: EventDict) -> EventDict:
    """Filter log records based on level."""
    try:
        if not any(ignored in logger.name for ignored in IGNORED_LOGGERS):
            level_no = getattr(logging, event_dict.get('level', 'NOTSET').upper())
            min_level = getattr(logging, STDERR_LOG_LEVEL)
            if level_no >= min_level:
                return event_dict
        raise structlog.DropEvent
    except AttributeError:
        return event_dict

class CompactJSONRenderer:
    """Single-line JSON renderer with minimal output."""
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        items = {
            "ts": event_dict.pop("timestamp", None),
            "lvl": event_dict.pop("level", "???"),
            "msg": event_dict.pop("event", ""),
            **{k: v for k, v in event_dict.items() if k in ('module', 'line', 'file')}
        }
        if other := {k: v for k, v in event_dict.items() if k not in ('module', 'line', 'file')}:
            items["data"] = other
        return json.dumps(items, separators=(',', ':'), default=str)

def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the host application.

    This sets up:
    - TTY stderr: compact JSON, filtered by level & ignored loggers
    - otherwise: console rendering through the stdlib logging bridge
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level)
    )

    stderr_processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        level_filter,
        add_timestamp,
        add_caller_info,
        CompactJSONRenderer()
    ]

    stdout_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=True)
    ]

    structlog.configure(
        processors=stderr_processors if sys.stderr.isatty() else stdout_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
