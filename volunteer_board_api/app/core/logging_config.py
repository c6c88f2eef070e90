"""
Basic logging configuration for the application.

``setup_logging`` attaches a console handler and an optional file
handler to the root logger.  ``log_request`` writes the single
access line emitted for every HTTP request by the middleware in
``main``.  Shipping logs to an external system is left to whatever
collects the process output.
"""

import logging
from pathlib import Path
from typing import Optional

access_logger = logging.getLogger("volunteer_board_api.access")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
# Marks the handlers installed here so repeated app construction is a no-op.
HANDLER_PREFIX = "volunteer_board"


def _installed(root: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in root.handlers)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Route application logs to the console and, optionally, a file.

    Handlers are attached to the root logger once; building another app
    in the same process (the test suite does) only updates the level.
    Unknown level names fall back to ``INFO``.  The file's directory is
    created when missing.  Uvicorn's own access log is silenced because
    the middleware in ``main`` writes one line per request already.
    """
    root = logging.getLogger()
    numeric_level = logging.getLevelName(level.upper())
    root.setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_name = f"{HANDLER_PREFIX}.console"
    if not _installed(root, console_name):
        console_handler = logging.StreamHandler()
        console_handler.set_name(console_name)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    file_name = f"{HANDLER_PREFIX}.file"
    if logfile and not _installed(root, file_name):
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(file_name)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger("uvicorn.access").disabled = True


def log_request(method: str, path: str, status_code: int, duration_ms: float, user_agent: Optional[str]) -> None:
    """Emit one access log line for a completed HTTP request."""
    level = logging.WARNING if status_code >= 500 else logging.INFO
    access_logger.log(
        level,
        "%s %s -> %s (%.2f ms) ua=%s",
        method,
        path,
        status_code,
        duration_ms,
        user_agent or "-",
    )
