"""
Centralized logging configuration for the contract analyzer.

Separates logs into files by pipeline stage:

    logs/
    ├── pipeline.log        # Controller state transitions
    ├── documents.log       # PDF text extraction
    ├── upload.log          # Multipart payload building
    ├── analysis.log        # HTTP exchange with the analysis service, decoding
    ├── config.log          # Settings loading
    ├── cli.log             # Command line entry points
    └── errors.log          # ALL errors from ALL components (ERROR+)

Files are opened on the first record, so a health check that never uploads
leaves no empty upload.log behind.

Usage:
    from contract_analyzer.logging_config import setup_logging
    setup_logging("cli", level="DEBUG", logs_dir=settings.log_dir)
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import structlog

LOGS_DIR = Path(__file__).parent.parent / "logs"

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_CATEGORIES = {
    "pipeline": "pipeline.log",
    "documents": "documents.log",
    "upload": "upload.log",
    "analysis": "analysis.log",
    "config": "config.log",
    "cli": "cli.log",
}

# Which categories each process writes
PROCESS_CATEGORIES = {
    "cli": ["cli", "pipeline", "documents", "upload", "analysis", "config"],
    "check": ["cli", "config", "analysis"],
}

_initialized = False
# Handlers installed by setup_logging, keyed by logger name ("" = root)
_installed: Dict[str, List[logging.Handler]] = {}


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.FileHandler:
    handler = logging.FileHandler(str(path), encoding="utf-8", delay=True)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _attach(logger_name: str, handler: logging.Handler) -> None:
    logging.getLogger(logger_name or None).addHandler(handler)
    _installed.setdefault(logger_name, []).append(handler)


def setup_logging(
    component: str = "cli",
    level: str = "INFO",
    logs_dir: Optional[Path] = None,
) -> Path:
    """Configure logging for one process.

    The console only shows WARNING and above on stderr, so ``--json``
    output on stdout stays machine-readable.

    Args:
        component: Process name ("cli" or "check").
                   Determines which category files are written.
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        logs_dir: Directory for log files. Defaults to ``<project>/logs``.

    Returns:
        The directory log files are written to
    """
    global _initialized
    logs_dir = Path(logs_dir) if logs_dir else LOGS_DIR
    if _initialized:
        return logs_dir
    _initialized = True

    logs_dir.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(log_level)

    console_h = logging.StreamHandler(sys.stderr)
    console_h.setLevel(max(log_level, logging.WARNING))
    console_h.setFormatter(formatter)
    _attach("", console_h)
    _attach("", _file_handler(logs_dir / "errors.log", logging.ERROR, formatter))

    categories = PROCESS_CATEGORIES.get(component, list(LOG_CATEGORIES))
    for category in categories:
        logging.getLogger(category).setLevel(log_level)
        _attach(category, _file_handler(logs_dir / LOG_CATEGORIES[category], log_level, formatter))

    # httpx logs every request at INFO; our analysis category already does
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.get_logger("cli").info(
        "logging_initialized",
        component=component,
        categories=categories,
        level=level,
        logs_dir=str(logs_dir),
    )
    return logs_dir


def reset_logging() -> None:
    """Detach and close every handler setup_logging installed."""
    global _initialized
    for logger_name, handlers in _installed.items():
        target = logging.getLogger(logger_name or None)
        for handler in handlers:
            target.removeHandler(handler)
            handler.close()
    _installed.clear()
    _initialized = False
