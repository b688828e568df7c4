"""Queries (CQRS read operations)."""

from warden.application.queries.log_queries import GetLog, ListLogs
from warden.application.queries.user_queries import GetUser, ListUsers

__all__ = ["GetLog", "GetUser", "ListLogs", "ListUsers"]
