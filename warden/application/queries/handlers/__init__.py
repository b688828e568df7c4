"""Query handlers."""

from warden.application.queries.handlers.get_user_handler import GetUserHandler
from warden.application.queries.handlers.list_users_handler import ListUsersHandler
from warden.application.queries.handlers.log_query_handlers import (
    GetLogHandler,
    ListLogsHandler,
)

__all__ = ["GetLogHandler", "GetUserHandler", "ListLogsHandler", "ListUsersHandler"]
