"""Logging utilities for mapgeom.

The library never attaches output handlers on its own: the "mapgeom" stdlib
logger carries a NullHandler, and records only reach a console or file once
an application calls configure_logging().
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOGGER_NAME = "mapgeom"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]

# Handlers installed by configure_logging, replaced on reconfiguration.
_installed_handlers: list[logging.Handler] = []


@dataclass
class OperationStats:
    """Statistics accumulated over spatial operations."""

    succeeded_count: int = 0
    failed_count: int = 0
    by_operation: Counter[str] = field(default_factory=Counter)
    failures: list[tuple[str, str]] = field(default_factory=list)
    total_duration_ms: float = 0.0

    @property
    def total_count(self) -> int:
        """Number of operations recorded."""
        return self.succeeded_count + self.failed_count

    @property
    def avg_duration_ms(self) -> float:
        """Average operation time."""
        if self.total_count == 0:
            return 0.0
        return self.total_duration_ms / self.total_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _installed_handlers.append(console_handler)

    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(LOGGER_NAME)
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class OperationLogger:
    """Logger for spatial operation outcomes and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize the logger.

        Args:
            logger: Structured logger to write to (default: the "mapgeom"
                stdlib logger, silent until configure_logging() runs)
        """
        if logger is None:
            logger = structlog.wrap_logger(
                logging.getLogger(LOGGER_NAME),
                processors=_PROCESSORS,
                wrapper_class=structlog.stdlib.BoundLogger,
            )
        self._logger = logger
        self._stats = OperationStats()

    def log_operation_start(self, operation: str, input_type: str) -> None:
        """Log start of a spatial operation."""
        self._logger.debug("Operation started", operation=operation, input_type=input_type)

    def log_operation_complete(
        self,
        operation: str,
        input_type: str,
        output_type: str,
        duration_ms: float,
    ) -> None:
        """Log a successful spatial operation."""
        self._logger.info(
            "Operation complete",
            operation=operation,
            input_type=input_type,
            output_type=output_type,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.succeeded_count += 1
        self._stats.by_operation[operation] += 1
        self._stats.total_duration_ms += duration_ms

    def log_operation_failed(
        self,
        operation: str,
        input_type: str,
        reason: str,
        duration_ms: float = 0.0,
    ) -> None:
        """Log a spatial operation that produced no result."""
        self._logger.warning(
            "Operation failed",
            operation=operation,
            input_type=input_type,
            reason=reason,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.failed_count += 1
        self._stats.by_operation[operation] += 1
        self._stats.total_duration_ms += duration_ms
        self._stats.failures.append((operation, reason))

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
