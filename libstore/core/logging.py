"""
Structured logging configuration with storage event tracking.

This module configures JSON logging for the catalogue service and provides
a specialized logger for catalogue load/save events, so that missing
document fields and skipped entries leave a trace with their context.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pythonjsonlogger import jsonlogger

from libstore.core.settings import settings


class StorageContextFilter(logging.Filter):
    """Add storage context to log records."""

    def filter(self, record):
        # Add default storage fields if not present
        if not hasattr(record, 'event_type'):
            record.event_type = 'application'
        if not hasattr(record, 'path'):
            record.path = None
        if not hasattr(record, 'kind'):
            record.kind = None

        return True


class CustomJSONFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with application and storage context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        # Add timestamp in ISO format (timezone-aware)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')

        # Add application context
        log_record['app_name'] = settings.app_name
        log_record['environment'] = settings.environment
        log_record['version'] = settings.app_version

        # Ensure level is always present
        log_record['level'] = record.levelname

        storage_fields = [
            'event_type', 'path', 'kind', 'index', 'missing_field',
            'item_count', 'counts', 'error_code'
        ]
        for field in storage_fields:
            if hasattr(record, field) and getattr(record, field) is not None:
                log_record[field] = getattr(record, field)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_json: bool = True
) -> None:
    """Setup logging configuration for the service loggers."""

    # Create logs directory if it doesn't exist
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    if enable_json:
        formatter = CustomJSONFormatter(
            fmt='%(timestamp)s %(level)s %(name)s %(message)s'
        )
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(StorageContextFilter())
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(StorageContextFilter())
        handlers.append(file_handler)

    level = getattr(logging, log_level.upper())
    for logger in (app_logger, storage_logger, audit_logger):
        logger.setLevel(level)
        logger.propagate = False
        logger.handlers.clear()

        for handler in handlers:
            logger.addHandler(handler)


app_logger = logging.getLogger('app')
storage_logger = logging.getLogger('storage')
audit_logger = logging.getLogger('audit')


class StorageEventLogger:
    """Specialized logger for catalogue document events."""

    def __init__(self):
        self.logger = storage_logger

    def catalogue_saved(self, path: str, counts: dict):
        """Log a successful write of the catalogue document."""
        self.logger.info(
            f"Catalogue saved to {path}",
            extra={
                'event_type': 'catalogue_saved',
                'path': path,
                'counts': counts,
                'item_count': sum(counts.values())
            }
        )

    def catalogue_loaded(self, path: str, item_count: int):
        """Log a successful read of the catalogue document."""
        self.logger.info(
            f"Catalogue loaded from {path}",
            extra={
                'event_type': 'catalogue_loaded',
                'path': path,
                'item_count': item_count
            }
        )

    def missing_field(self, field_name: str):
        """Log an absent top-level kind field that was read as empty."""
        self.logger.warning(
            f"Document has no '{field_name}' field, treating it as empty",
            extra={
                'event_type': 'missing_field',
                'missing_field': field_name
            }
        )

    def item_skipped(self, kind: str, index: int, reason: str):
        """Log an entry dropped because it failed to decode."""
        self.logger.warning(
            f"Skipping undecodable {kind} entry at index {index}: {reason}",
            extra={
                'event_type': 'item_skipped',
                'kind': kind,
                'index': index
            }
        )


storage_event_logger = StorageEventLogger()


# Initialize logging on module import
setup_logging(
    log_level=settings.log_level,
    log_file=settings.log_file,
    enable_json=settings.log_format.lower() == "json"
)
