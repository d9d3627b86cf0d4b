"""
Logging Configuration

Console, rotating file and JSON logging, structlog setup, and backend request
metrics.
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger.json import JsonFormatter

from storefront.infrastructure.utilities.constants import LoggingSettings


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output"""

    colors = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        log_color = self.colors.get(record.levelname, self.colors['RESET'])
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{log_color}{record.levelname}{self.colors['RESET']}"
        return super().format(record)


class StorefrontJsonFormatter(JsonFormatter):
    """JSON formatter with the fields the request and use-case logs carry"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        for attr in ("operation", "error_code", "status_code", "response_time"):
            if hasattr(record, attr):
                log_record[attr] = getattr(record, attr)


@dataclass
class RequestLog:
    """One backend round trip"""
    method: str
    path: str
    response_time: float
    status: str = "success"
    status_code: Optional[int] = None
    extra_data: Optional[Dict[str, Any]] = field(default_factory=dict)


class RequestMetrics:
    """Backend request metrics"""

    SLOW_REQUEST_SECONDS = 2.0

    def __init__(self, name: str = "storefront.requests"):
        self.logger = logging.getLogger(name)
        self.metrics = {
            'total_requests': 0,
            'slow_requests': 0,
            'error_requests': 0,
            'avg_response_time': 0.0
        }

    def log_request(self, log: RequestLog):
        """Record a request and log it"""
        self.metrics['total_requests'] += 1

        if log.response_time > self.SLOW_REQUEST_SECONDS:
            self.metrics['slow_requests'] += 1

        if log.status != "success":
            self.metrics['error_requests'] += 1

        # Running average
        current_avg = self.metrics['avg_response_time']
        total_requests = self.metrics['total_requests']
        self.metrics['avg_response_time'] = (
            (current_avg * (total_requests - 1) + log.response_time) / total_requests
        )

        log_data = {
            'method': log.method,
            'path': log.path,
            'response_time': log.response_time,
            'status_code': log.status_code,
            **(log.extra_data or {})
        }

        if log.response_time > self.SLOW_REQUEST_SECONDS:
            self.logger.warning(
                "Slow request: %s %s took %.2fs", log.method, log.path, log.response_time,
                extra=log_data
            )
        else:
            self.logger.debug(
                "Request: %s %s (%.2fs)", log.method, log.path, log.response_time,
                extra=log_data
            )

    def get_metrics(self) -> Dict[str, Any]:
        """Get current request metrics"""
        return {
            **self.metrics,
            'error_rate': (
                self.metrics['error_requests'] / max(1, self.metrics['total_requests'])
            )
        }

    def reset(self):
        for key in self.metrics:
            self.metrics[key] = 0 if key != 'avg_response_time' else 0.0


@dataclass
class LoggingConfigOptions:
    """Dataclass for logging configuration options"""
    log_level: str = "INFO"
    log_dir: str = "logs"
    enable_console: bool = True
    enable_file: bool = False
    enable_json: bool = False
    max_file_size: int = LoggingSettings.MAX_LOG_FILE_SIZE
    backup_count: int = LoggingSettings.BACKUP_COUNT


class LoggingConfig:
    """Root logger and structlog configuration"""

    def __init__(self, options: LoggingConfigOptions):
        self.options = options
        if self.options.enable_file or self.options.enable_json:
            Path(self.options.log_dir).mkdir(parents=True, exist_ok=True)
        self._configure_structlog()

    def __repr__(self):
        return f"LoggingConfig(options={self.options})"

    def _configure_structlog(self):
        """Configure structlog for structured logging"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer()
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def setup_logging(self):
        """Install handlers on the root logger"""
        level = getattr(logging, self.options.log_level.upper(), logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if self.options.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(ColoredFormatter(
                fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            root_logger.addHandler(console_handler)

        if self.options.enable_file:
            app_handler = logging.handlers.RotatingFileHandler(
                Path(self.options.log_dir) / LoggingSettings.MAIN_LOG_FILE,
                maxBytes=self.options.max_file_size,
                backupCount=self.options.backup_count,
                encoding="utf-8",
            )
            app_handler.setLevel(logging.INFO)
            app_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            root_logger.addHandler(app_handler)

        if self.options.enable_json:
            json_handler = logging.handlers.RotatingFileHandler(
                Path(self.options.log_dir) / LoggingSettings.JSON_LOG_FILE,
                maxBytes=self.options.max_file_size,
                backupCount=self.options.backup_count,
                encoding="utf-8",
            )
            json_handler.setLevel(logging.INFO)
            json_handler.setFormatter(StorefrontJsonFormatter())
            root_logger.addHandler(json_handler)

        logging.getLogger('httpx').setLevel(logging.WARNING)
        logging.getLogger('httpcore').setLevel(logging.WARNING)

        logging.getLogger(__name__).info(
            "✅ Logging configured - Level: %s, Console: %s, File: %s, JSON: %s",
            self.options.log_level,
            self.options.enable_console,
            self.options.enable_file,
            self.options.enable_json
        )


request_metrics = RequestMetrics()


def setup_logging(options: Optional[LoggingConfigOptions] = None):
    """Setup logging using the LoggingConfig class"""
    config = LoggingConfig(options or LoggingConfigOptions())
    config.setup_logging()
    return config


def options_from_settings(settings) -> LoggingConfigOptions:
    """Build logging options from application settings"""
    return LoggingConfigOptions(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.environment == "production",
        enable_json=settings.enable_json_logs,
    )


def get_request_metrics() -> Dict[str, Any]:
    """Get metrics from the shared request logger"""
    return request_metrics.get_metrics()


def reset_request_metrics():
    """Zero the shared request counters"""
    request_metrics.reset()


def log_request(log: RequestLog):
    """Record a backend round trip"""
    request_metrics.log_request(log)


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
