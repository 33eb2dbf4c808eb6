# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.path import user_data_dir
from infra.operational_support import (
    TraceIdLogFilter,
    get_operational_support,
    install_global_exception_hooks,
)

FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"


def setup_logging(level: int = logging.INFO, log_dir: Path | None = None) -> Path:
    """
    Configure root logging: rotating file under the user data dir plus console.
    Returns the log file path.
    """
    log_dir = log_dir or (user_data_dir() / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "workbench.log"

    logger = logging.getLogger()
    logger.setLevel(level)

    # Re-running setup must not stack handlers.
    logger.handlers.clear()

    trace_filter = TraceIdLogFilter()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    install_global_exception_hooks()
    get_operational_support().emit_event(
        event_type="app.logging.initialized",
        message=f"Logging initialized at {log_file}",
        data={"log_file": str(log_file)},
    )
    return log_file
