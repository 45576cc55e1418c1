"""Read path: group listing, paging and intersection."""

from redislogger.query.service import QueryService

__all__ = ["QueryService"]
