# src/literal_lexer/utils/logging_config.py

import logging
import logging.config
import os
import time
from typing import Optional

LOGGER_NAMESPACE = "literal_lexer"
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(name: Optional[str], default: str = DEFAULT_LOG_LEVEL) -> str:
    """
    Normalize a level name, falling back to ``default`` when it is not a known level.

    Args:
        name: Level name such as ``"debug"`` or ``"WARNING"``; may be None

    Returns:
        Upper-case level name accepted by ``logging``
    """
    if not name:
        return default
    candidate = name.strip().upper()
    if isinstance(logging.getLevelName(candidate), int):
        return candidate
    return default


def setup_logging(
    log_level: str = "INFO",
    enable_console: bool = True,
    enable_performance: bool = False
) -> None:
    """
    Set up logging configuration for the literal lexer.

    Console output goes to stderr: stdout is reserved for the token stream.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Whether to enable console logging
        enable_performance: Whether to emit per-stage timings through the console
    """
    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(levelname)s - %(name)s - %(message)s'
            }
        },
        'handlers': {},
        'loggers': {
            LOGGER_NAMESPACE: {
                'level': log_level,
                'handlers': [],
                'propagate': True
            },
            f'{LOGGER_NAMESPACE}.performance': {
                'level': 'DEBUG' if enable_performance else log_level,
                'handlers': [],
                'propagate': True
            }
        },
        'root': {
            'level': log_level,
            'handlers': []
        }
    }

    if enable_console:
        config['handlers']['console'] = {
            'class': 'logging.StreamHandler',
            'level': 'DEBUG' if enable_performance else log_level,
            'formatter': 'simple',
            'stream': 'ext://sys.stderr'
        }
        config['root']['handlers'].append('console')

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def get_performance_logger() -> logging.Logger:
    """Get a logger instance for performance metrics."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.performance")


class PerformanceTimer:
    """Context manager for timing operations and logging performance metrics."""

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None):
        self.operation_name = operation_name
        self.logger = logger or get_performance_logger()
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time

        if exc_type is None:
            self.logger.debug(f"{self.operation_name} completed in {self.duration:.4f}s")
        else:
            self.logger.warning(f"{self.operation_name} failed after {self.duration:.4f}s: {exc_val}")


def init_default_logging():
    """Initialize default logging configuration if not already set up."""
    if not logging.getLogger().handlers:
        log_level = resolve_log_level(os.getenv('LITERAL_LEXER_LOG_LEVEL'))
        enable_perf = os.getenv('LITERAL_LEXER_ENABLE_PERFORMANCE_LOGGING', 'false').lower() == 'true'

        setup_logging(
            log_level=log_level,
            enable_console=True,
            enable_performance=enable_perf
        )


# Auto-initialize on import
init_default_logging()
