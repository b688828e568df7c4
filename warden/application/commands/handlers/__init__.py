"""Command handlers."""

from warden.application.commands.handlers.create_log_handler import CreateLogHandler
from warden.application.commands.handlers.create_user_handler import CreateUserHandler
from warden.application.commands.handlers.delete_user_handler import DeleteUserHandler
from warden.application.commands.handlers.login_user_handler import LoginUserHandler
from warden.application.commands.handlers.logout_user_handler import LogoutUserHandler
from warden.application.commands.handlers.register_user_handler import (
    RegisterUserHandler,
)
from warden.application.commands.handlers.update_user_handler import UpdateUserHandler

__all__ = [
    "CreateLogHandler",
    "CreateUserHandler",
    "DeleteUserHandler",
    "LoginUserHandler",
    "LogoutUserHandler",
    "RegisterUserHandler",
    "UpdateUserHandler",
]
