from .otel_logger import get_logger, logger

__all__ = ["get_logger", "logger"]
