# src/literal_lexer/utils/__init__.py

from .logging_config import (
    setup_logging, get_logger, get_performance_logger, resolve_log_level, PerformanceTimer
)

__all__ = [
    'setup_logging',
    'get_logger',
    'get_performance_logger',
    'resolve_log_level',
    'PerformanceTimer',
]
