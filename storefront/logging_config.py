"""Logging setup shared by the command-line entrypoints."""

from __future__ import annotations

import logging
import os

from storefront.config import LOG_DIR, LOG_FORMAT

logger = logging.getLogger(__name__)


def file_logging_enabled() -> bool:
    """Return False when ``DISABLE_FILE_LOGS`` is set (tests, CI)."""
    return not os.environ.get("DISABLE_FILE_LOGS")


def configure_logging(
    log_filename: str, log_level: str = "INFO", enable_file: bool = True
) -> None:
    """Configure console and optional file logging for one pipeline stage.

    Parameters
    ----------
    log_filename : str
        File name under ``LOG_DIR`` receiving the stage's log records.
    log_level : str, optional
        Logging level name, e.g. ``"DEBUG"``. Defaults to ``"INFO"``.
    enable_file : bool, optional
        Whether to add the file handler. A handler that cannot be created
        (read-only checkout, missing permissions) is skipped with a warning.

    Notes
    -----
    Existing root handlers are removed first, so repeated calls are safe.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(0, logging.FileHandler(LOG_DIR / log_filename, mode="a"))
        except OSError as exc:
            file_error = exc
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning("File logging disabled: %s", file_error)
