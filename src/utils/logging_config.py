from loguru import logger
import sys
from src.utils.context import request_id, session_id
from common import global_config
from human_id import generate_id
import os

_logging_initialized = False


def _should_show_location(level: str) -> bool:
    """Determine if location should be shown for given log level"""
    level = level.lower()
    config = global_config.logging.format.location

    if not config.enabled:
        return False

    level_map = {
        "info": config.show_for_info,
        "debug": config.show_for_debug,
        "warning": config.show_for_warning,
        "error": config.show_for_error,
    }

    return level_map.get(level, True)  # Default to True for unknown levels


def _get_instance_id() -> str:
    """Short id of the container instance serving this process"""
    raw_id = os.getenv("ECS_TASK_ID") or os.getenv("HOSTNAME")
    if not raw_id:
        return "local"

    # Last 4 chars keep log lines narrow while staying distinct per instance
    return f"i{raw_id[-4:]}"


def _get_session_color(session_id: str) -> str:
    """Get a consistent color for a given session ID"""
    if session_id == "---":
        return "white"

    # List of distinct colors that work well in terminals
    colors = ["green", "yellow", "blue", "magenta", "cyan", "red"]

    # Convert session ID to a consistent numeric value
    # Take last 8 chars to limit the size of the number
    numeric_id = sum(ord(c) for c in session_id[-8:])
    color_index = numeric_id % len(colors)

    return colors[color_index]


def _build_format_string(record: dict) -> str:
    """Build format string dynamically based on log level"""
    format_parts = ["<level>{level: <6}</level>"]

    if global_config.logging.format.show_time:
        format_parts.append("{time:HH:mm:ss}")

    if global_config.logging.format.show_session_id:
        session_color = _get_session_color(record["extra"]["session_id"])
        format_parts.append(f"<{session_color}>{{extra[session_id]}}</{session_color}>")

    format_parts.append("<magenta>{extra[instance_id]}</magenta>")

    # Build the location part of the format string if needed for this level
    if _should_show_location(record["level"].name):
        location_parts = []
        config = global_config.logging.format.location

        if config.show_file:
            location_parts.append("<cyan>{file.name}</cyan>")
        if config.show_function:
            location_parts.append("<cyan>{function}</cyan>")
        if config.show_line:
            location_parts.append("<cyan>{line}</cyan>")

        if location_parts:
            format_parts.append(":".join(location_parts))

    format_parts.append("<level>{message}</level>{exception}")
    return " | ".join(format_parts) + "\n"


def _should_log_level(level: str, overrides: dict | None = None) -> bool:
    """Determine if this log level should be shown based on config and overrides"""
    level = level.lower()

    if overrides is None:
        overrides = {}

    # Check overrides first if they exist
    if overrides and level in overrides:
        return overrides[level]

    # Fall back to global config
    try:
        return getattr(global_config.logging.levels, level)
    except AttributeError:
        return True


def setup_logging(*, debug=None, info=None, warning=None, error=None, critical=None):
    """Setup centralized logging configuration with optional level overrides

    Log lines carry the id of the request being served when there is one,
    otherwise the process session id.

    Args:
        debug (bool, optional): Override global debug log level
        info (bool, optional): Override global info log level
        warning (bool, optional): Override global warning log level
        error (bool, optional): Override global error log level
        critical (bool, optional): Override global critical log level
    """
    global _logging_initialized, logger

    if _logging_initialized:
        return

    # Remove any existing handlers
    logger.remove()

    # Initialize session_id if not already set
    if session_id.get() is None:
        session_id.set(generate_id())

    # Build overrides dict from provided arguments
    overrides = {}
    if debug is not None:
        overrides["debug"] = debug
    if info is not None:
        overrides["info"] = info
    if warning is not None:
        overrides["warning"] = warning
    if error is not None:
        overrides["error"] = error
    if critical is not None:
        overrides["critical"] = critical

    def log_filter(record):
        if "extra" not in record:
            record["extra"] = {}
        record["extra"]["session_id"] = request_id.get() or session_id.get() or "---"
        record["extra"]["instance_id"] = _get_instance_id()

        # Check if this level should be logged using overrides
        return _should_log_level(record["level"].name, overrides)

    # Add our standardized handler with dynamic format and filter
    logger.add(
        sys.stderr,
        format=lambda record: _build_format_string(record),
        colorize=True,
        enqueue=True,
        backtrace=True,
        diagnose=True,
        catch=True,
        filter=log_filter,
    )

    _logging_initialized = True
