"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from roundup_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_round_up_batch(
    request_id: str,
    processed_count: int,
    rejected_count: int,
    total_round_ups: str,
    duration_ms: float,
) -> None:
    """Log structured batch outcome for upstream reporting"""
    logging.info(
        "Round-up batch completed",
        extra={
            "request_id": request_id,
            "step": "round_up_batch_complete",
            "processed_count": processed_count,
            "rejected_count": rejected_count,
            "total_round_ups": total_round_ups,
            "duration_ms": duration_ms,
        },
    )


def log_projection(request_id: str, kind: str, annual_rate: str, duration_ms: float) -> None:
    logging.info(
        "Projection completed",
        extra={
            "request_id": request_id,
            "step": "projection_complete",
            "kind": kind,
            "annual_rate": annual_rate,
            "duration_ms": duration_ms,
        },
    )


def log_request(request_id: str, method: str, endpoint: str, status: int, duration_ms: float) -> None:
    logging.info(
        "Request completed",
        extra={
            "request_id": request_id,
            "step": "request_complete",
            "method": method,
            "endpoint": endpoint,
            "status": status,
            "duration_ms": duration_ms,
        },
    )
