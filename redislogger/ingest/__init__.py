"""Write path for log entries."""

from redislogger.ingest.ingestor import Ingestor

__all__ = ["Ingestor"]
