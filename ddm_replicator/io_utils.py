from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

LOGGER_NAME = "ddm_replicator"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def log_file_name(mode: str) -> str:
    return "diagnostics.log" if mode == "full" else f"diagnostics_{mode}.log"


def _attach_file_handler(logger: logging.Logger, log_path: Path) -> None:
    target = os.path.abspath(log_path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    log_path.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(_FORMAT)
    logger.addHandler(fh)


def get_logger(*, mode: str = "full", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure and return the diagnostics logger.

    Logs to stderr and, when `log_dir` is given, also appends to
    `log_dir/diagnostics.log` (or `_quick`). The stderr handler is attached
    once per process; a log file is attached the first time its path is
    requested, even if the logger was already configured without one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    if not getattr(logger, "_configured", False):
        sh = logging.StreamHandler()
        sh.setLevel(logging.INFO)
        sh.setFormatter(_FORMAT)
        logger.addHandler(sh)
        logger.propagate = False
        logger._configured = True  # type: ignore[attr-defined]

    if log_dir is not None:
        _attach_file_handler(logger, Path(log_dir) / log_file_name(mode))
    return logger
