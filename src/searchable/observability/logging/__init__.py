"""Observability – structured logging helpers."""
from searchable.observability.logging.factory import JsonLoggerFactory
from searchable.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
