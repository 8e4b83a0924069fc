#!/usr/bin/env python3
"""
HTML Compare Configuration & Logging Module
===========================================
Centralized configuration, structured logging, and error types.

Version: 1.0.0
"""

import os
import sys
import json
import logging
import uuid
import time
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path
from dataclasses import dataclass, field
from contextlib import contextmanager
import threading

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================
DEFAULT_MAX_UPLOAD_MB = 16          # Default max request size in megabytes
MAX_SAFE_UPLOAD_MB = 200            # Maximum safe request size in megabytes
DEFAULT_DIFF_TIMEOUT = 2.0          # Seconds per character diff (0 = unlimited)
DEFAULT_DIFF_EDIT_COST = 4
SUPPORTED_PARSERS = ('lxml', 'html.parser')
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                # Number of log backup files to keep

DEFAULT_MAX_UPLOAD_BYTES = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
MAX_SAFE_UPLOAD_BYTES = MAX_SAFE_UPLOAD_MB * 1024 * 1024

__version__ = '1.0.0'
VERSION = __version__
APP_NAME = "HtmlCompare"


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == 'true'


# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================

@dataclass
class CompareConfig:
    """Comparison and service configuration with safe defaults."""

    # Server settings
    host: str = "127.0.0.1"  # Localhost only by default
    port: int = 5060
    debug: bool = False
    max_content_length: int = DEFAULT_MAX_UPLOAD_BYTES

    # Comparison settings
    html_parser: str = "lxml"
    diff_timeout: float = DEFAULT_DIFF_TIMEOUT
    diff_edit_cost: int = DEFAULT_DIFF_EDIT_COST
    semantic_cleanup: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # Options: json, text
    log_to_file: bool = False
    log_to_console: bool = True
    log_dir: Path = field(default_factory=lambda: Path(__file__).parent / 'logs')

    def __post_init__(self):
        """Prepare the log directory and apply production overrides."""
        self.log_dir = Path(self.log_dir)
        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        if os.environ.get('HC_ENV', 'development').lower() == 'production':
            self.debug = False
            self.log_level = "WARNING"

    @classmethod
    def from_env(cls) -> 'CompareConfig':
        """Load configuration from environment variables."""
        kwargs = {}
        if os.environ.get('HC_LOG_DIR'):
            kwargs['log_dir'] = Path(os.environ['HC_LOG_DIR'])
        return cls(
            host=os.environ.get('HC_HOST', '127.0.0.1'),
            port=int(os.environ.get('HC_PORT', '5060')),
            debug=_env_bool('HC_DEBUG', 'false'),
            max_content_length=int(os.environ.get('HC_MAX_UPLOAD', str(DEFAULT_MAX_UPLOAD_BYTES))),
            html_parser=os.environ.get('HC_HTML_PARSER', 'lxml'),
            diff_timeout=float(os.environ.get('HC_DIFF_TIMEOUT', str(DEFAULT_DIFF_TIMEOUT))),
            diff_edit_cost=int(os.environ.get('HC_DIFF_EDIT_COST', str(DEFAULT_DIFF_EDIT_COST))),
            semantic_cleanup=_env_bool('HC_SEMANTIC_CLEANUP', 'true'),
            log_level=os.environ.get('HC_LOG_LEVEL', 'INFO'),
            log_format=os.environ.get('HC_LOG_FORMAT', 'json'),
            log_to_file=_env_bool('HC_LOG_TO_FILE', 'false'),
            log_to_console=_env_bool('HC_LOG_TO_CONSOLE', 'true'),
            **kwargs
        )

    def validate(self) -> tuple:
        """Validate configuration and return (is_valid, errors)."""
        errors = []

        if self.debug and os.environ.get('HC_ENV') == 'production':
            errors.append("Debug mode cannot be enabled in production")

        if self.html_parser not in SUPPORTED_PARSERS:
            errors.append(f"Invalid html_parser: {self.html_parser}. "
                          f"Must be one of {', '.join(SUPPORTED_PARSERS)}")

        if self.diff_timeout < 0:
            errors.append("diff_timeout cannot be negative")

        if self.diff_edit_cost < 1:
            errors.append("diff_edit_cost must be at least 1")

        if self.max_content_length > MAX_SAFE_UPLOAD_BYTES:
            errors.append(f"Max content length exceeds safe limit ({MAX_SAFE_UPLOAD_MB}MB)")

        if self.log_format not in ('json', 'text'):
            errors.append(f"Invalid log_format: {self.log_format}. Must be 'json' or 'text'")

        return (len(errors) == 0, errors)


# Global config instance
_config: Optional[CompareConfig] = None


def get_config() -> CompareConfig:
    """Get or create the global configuration."""
    global _config
    if _config is None:
        _config = CompareConfig.from_env()
    return _config


def reset_config():
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured JSON logger with correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, config: Optional[CompareConfig] = None):
        self.name = name
        self.config = config or get_config()
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))
        self.logger.handlers.clear()

        if self.config.log_format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # File handler with rotation
        if self.config.log_to_file:
            from logging.handlers import RotatingFileHandler
            log_file = self.config.log_dir / f"{self.name.lower()}.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        return getattr(cls._local, 'correlation_id', None) or str(uuid.uuid4())[:8]

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _build_log_record(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        """Build a structured log record."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'logger': self.name,
            'correlation_id': self.get_correlation_id(),
            'message': message,
            **kwargs
        }

    def _emit(self, level: int, level_name: str, message: str, exc_info: bool = False, **kwargs):
        record = self._build_log_record(level_name, message, **kwargs)
        if exc_info:
            import traceback
            record['traceback'] = traceback.format_exc()
        text = json.dumps(record, default=str) if self.config.log_format == 'json' else message
        self.logger.log(level, text, exc_info=exc_info, extra=kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._emit(logging.DEBUG, 'DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._emit(logging.INFO, 'INFO', message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._emit(logging.WARNING, 'WARNING', message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self._emit(logging.ERROR, 'ERROR', message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation} completed", operation=operation, status='completed',
                      duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    _RESERVED = frozenset((
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'stack_info', 'thread', 'threadName', 'exc_info', 'exc_text',
        'message', 'taskName'
    ))

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self._RESERVED:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name, get_config())


# =============================================================================
# ERROR HANDLING
# =============================================================================

class HtmlCompareError(Exception):
    """Base exception for HtmlCompare."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 status_code: int = 500, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ValidationError(HtmlCompareError):
    """Input validation error."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400,
                         details={'field': field, **kwargs})


class ProcessingError(HtmlCompareError):
    """Document processing error."""
    def __init__(self, message: str, stage: Optional[str] = None, **kwargs):
        super().__init__(message, code="PROCESSING_ERROR", status_code=500,
                         details={'stage': stage, **kwargs})


class ComparisonError(ProcessingError):
    """Any failure while extracting, diffing, mapping or rendering a comparison."""

    PREFIX = "Failed to compare documents: "

    def __init__(self, cause_message: str, stage: Optional[str] = None, **kwargs):
        super().__init__(self.PREFIX + cause_message, stage=stage, **kwargs)
        self.code = "COMPARISON_ERROR"
        self.cause_message = cause_message
