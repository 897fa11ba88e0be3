"""
Logging Configuration for Datalite

This module provides logging setup for the engine and the command line,
including structured JSON logging and typed solver events.
"""

import logging
import logging.handlers
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


class StructuredFormatter(logging.Formatter):
    """Structured JSON formatter for logs"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry)


class EngineLogger:
    """Logger with typed events for the fixpoint solver"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_iteration(self, iteration: int, previous_size: int, size: int) -> None:
        """Log one application of the immediate-consequence operator"""
        self.logger.debug(
            f"Iteration {iteration}: {previous_size} -> {size} atoms",
            extra={
                'extra_fields': {
                    'event_type': 'solver_iteration',
                    'iteration': iteration,
                    'previous_size': previous_size,
                    'size': size
                }
            }
        )

    def log_solve_complete(self,
                           rule_count: int,
                           iterations: int,
                           size: int,
                           execution_time: float) -> None:
        """Log that a fixpoint was reached"""
        self.logger.info(
            f"Fixpoint reached after {iterations} iterations with {size} atoms",
            extra={
                'extra_fields': {
                    'event_type': 'solve_complete',
                    'rules': rule_count,
                    'iterations': iterations,
                    'atoms': size,
                    'execution_time_ms': execution_time
                }
            }
        )

    def log_query(self, query: str, answer_count: int) -> None:
        """Log query answering"""
        self.logger.debug(
            f"Query {query} returned {answer_count} answers",
            extra={
                'extra_fields': {
                    'event_type': 'query',
                    'query': query,
                    'answer_count': answer_count
                }
            }
        )

    def log_validation_failure(self, rule: str, error_message: str) -> None:
        """Log a rejected program"""
        self.logger.error(
            f"Validation failed: {rule}",
            extra={
                'extra_fields': {
                    'event_type': 'validation_failure',
                    'rule': rule,
                    'error_message': error_message
                }
            }
        )


def setup_logging(log_level: str = "WARNING",
                  log_file: Optional[Union[str, Path]] = None,
                  enable_structured_logging: bool = False) -> None:
    """
    Setup logging for Datalite

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file
        enable_structured_logging: Whether to use structured JSON logging

    Raises:
        ValueError: if ``log_level`` is not a level name logging knows
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if enable_structured_logging:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Results go to stdout, so diagnostics go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> EngineLogger:
    """Get an EngineLogger for a module"""
    return EngineLogger(name)
