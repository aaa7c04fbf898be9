"""Logging configuration for the task timer.

The terminal is owned by the TUI, so records only go to a log file.
"""
import logging
from pathlib import Path
from typing import Union

LOG_FILENAME = "tasktimer.log"


def setup_logging(log_dir: Union[str, Path], level: int = logging.INFO) -> Path:
    """
    Configure the root logger with a single file handler.

    Call this ONCE, before the app starts.

    Args:
        log_dir: Directory for the log file (created if missing)
        level: Minimum level written to the file

    Returns:
        Path of the log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    return log_file
