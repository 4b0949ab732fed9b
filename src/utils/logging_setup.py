"""
Logging configuration for the Field Operations Geofence system.

This module provides centralized logging setup with environment-specific
configuration and structured logging capabilities.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional, TextIO
import json


_RESERVED_RECORD_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'taskName',
}


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""
    
    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }
        
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
        
        # Extra fields passed via logger.info(..., extra={...})
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS and key not in log_entry:
                log_entry[key] = value
        
        return json.dumps(log_entry, default=str)


def _build_formatter(environment: str) -> logging.Formatter:
    if environment == "production":
        return JSONFormatter(datefmt='%Y-%m-%d %H:%M:%S')
    return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def setup_logging(environment: str = "development", 
                  log_level: str = "INFO",
                  log_dir: Optional[str] = None,
                  stream: Optional[TextIO] = None) -> None:
    """
    Set up logging configuration for the field operations system.
    
    Args:
        environment: Environment name (development/production)
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR)
        log_dir: Directory for log files (optional)
        stream: Console stream (defaults to stdout)
    """
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
    
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper()))
    
    # Remove existing handlers to avoid duplicates
    logger.handlers = []
    
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(_build_formatter(environment))
    logger.addHandler(console_handler)
    
    if log_dir:
        file_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, f"fieldops_{environment}.log"),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(_build_formatter(environment))
        logger.addHandler(file_handler)
    
    logging.getLogger("shapely").setLevel(logging.WARNING)
    logging.getLogger("tenacity").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.
    
    Args:
        name: Logger name (typically __name__)
        
    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_performance(func):
    """
    Decorator to log function execution time.
    
    Args:
        func: Function to wrap
        
    Returns:
        Wrapped function with performance logging
    """
    import time
    import functools
    
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.perf_counter()
        
        logger.info(f"Starting {func.__name__}")
        try:
            result = func(*args, **kwargs)
            duration = time.perf_counter() - start_time
            logger.info(f"Completed {func.__name__} in {duration:.3f}s")
            return result
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(f"Failed {func.__name__} after {duration:.3f}s: {str(e)}")
            raise
    
    return wrapper
