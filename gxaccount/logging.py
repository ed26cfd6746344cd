"""
GXAccount SDK - Structured Logging

JSON log lines for auditing account and certification requests.
Key material is never passed to the logger.
"""

import json
import logging
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, Optional


class LogLevel(Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LogEntry:
    """Structured log entry."""
    timestamp: float
    level: str
    message: str
    component: str
    operation: Optional[str] = None
    account: Optional[str] = None
    duration_ms: Optional[float] = None
    details: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary, excluding None values."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class StructuredLogger:
    """
    Structured logger for service operations.

    Example:
        logger = StructuredLogger(component="gxaccount")

        with logger.operation("apply_merchant") as op:
            op.set_account("alice")
            ...
        # Logs completion or failure with duration
    """

    def __init__(
        self,
        component: str = "gxaccount",
        logger: Optional[logging.Logger] = None,
        json_output: bool = True
    ):
        """
        Args:
            component: Component name for log entries.
            logger: Underlying Python logger (creates one if None).
            json_output: If False, emit short "[LEVEL] message" lines.
        """
        self.component = component
        self.json_output = json_output

        if logger:
            self._logger = logger
        else:
            self._logger = logging.getLogger(component)
            if not self._logger.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter("%(message)s"))
                self._logger.addHandler(handler)
                self._logger.setLevel(logging.INFO)

    def _log(
        self,
        level: LogLevel,
        message: str,
        operation: Optional[str] = None,
        account: Optional[str] = None,
        duration_ms: Optional[float] = None,
        error: Optional[str] = None,
        **kwargs
    ) -> LogEntry:
        entry = LogEntry(
            timestamp=time.time(),
            level=level.value,
            message=message,
            component=self.component,
            operation=operation,
            account=account,
            duration_ms=duration_ms,
            details=kwargs or None,
            error=error
        )

        if self.json_output:
            log_message = entry.to_json()
        else:
            log_message = f"[{entry.level}] {entry.message}"
            if entry.account:
                log_message += f" account={entry.account}"
            if entry.duration_ms is not None:
                log_message += f" duration={entry.duration_ms:.2f}ms"

        self._logger.log(getattr(logging, level.value), log_message)
        return entry

    def debug(self, message: str, **kwargs) -> LogEntry:
        return self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> LogEntry:
        return self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> LogEntry:
        return self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, error: Optional[Exception] = None, **kwargs) -> LogEntry:
        return self._log(LogLevel.ERROR, message, error=str(error) if error else None, **kwargs)

    def operation(self, name: str) -> "OperationContext":
        """Context manager that times an operation and logs its outcome."""
        return OperationContext(self, name)

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(getattr(logging, level.value))


class OperationContext:
    """Context manager for timing operations."""

    def __init__(self, logger: StructuredLogger, operation: str):
        self.logger = logger
        self.operation = operation
        self.start_time: float = 0
        self.account: Optional[str] = None
        self.details: Dict[str, Any] = {}

    def __enter__(self) -> "OperationContext":
        self.start_time = time.time()
        self.logger.debug(f"Starting {self.operation}", operation=self.operation)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        duration_ms = (time.time() - self.start_time) * 1000

        if exc_val:
            self.logger.error(
                f"Failed {self.operation}",
                operation=self.operation,
                duration_ms=duration_ms,
                error=exc_val,
                account=self.account,
                **self.details
            )
        else:
            self.logger.info(
                f"Completed {self.operation}",
                operation=self.operation,
                duration_ms=duration_ms,
                account=self.account,
                **self.details
            )

    def set_account(self, account: str) -> None:
        self.account = account

    def add_detail(self, key: str, value: Any) -> None:
        self.details[key] = value


# Factory functions

def create_file_logger(
    filepath: str,
    component: str = "gxaccount",
    level: LogLevel = LogLevel.INFO
) -> StructuredLogger:
    """
    Create a logger that writes JSON lines to a file.

    Args:
        filepath: Path to log file.
        component: Component name.
        level: Minimum log level.
    """
    logger = logging.getLogger(f"{component}-file")
    handler = logging.FileHandler(filepath)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.value))

    return StructuredLogger(component=component, logger=logger)


def create_audit_logger(
    audit_callback: Callable[[dict], None],
    component: str = "gxaccount-audit"
) -> StructuredLogger:
    """
    Create a logger that hands each entry, as a dict, to an audit callback.
    """
    class AuditHandler(logging.Handler):
        def emit(self, record):
            try:
                entry = json.loads(record.getMessage())
            except json.JSONDecodeError:
                entry = {"message": record.getMessage()}
            audit_callback(entry)

    logger = logging.getLogger(f"{component}-audit")
    logger.addHandler(AuditHandler())
    logger.setLevel(logging.INFO)

    return StructuredLogger(component=component, logger=logger)
