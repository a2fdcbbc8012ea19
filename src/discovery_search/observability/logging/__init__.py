"""Observability – structured logging helpers."""
from discovery_search.observability.logging.factory import JsonLoggerFactory
from discovery_search.observability.logging.processors import SearchContextProcessor, get_logger

__all__ = ["JsonLoggerFactory", "SearchContextProcessor", "get_logger"]
