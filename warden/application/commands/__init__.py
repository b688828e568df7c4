"""Commands (CQRS write operations)."""

from warden.application.commands.auth_commands import LoginUser, LogoutUser, RegisterUser
from warden.application.commands.log_commands import CreateLog
from warden.application.commands.user_commands import CreateUser, DeleteUser, UpdateUser

__all__ = [
    "CreateLog",
    "CreateUser",
    "DeleteUser",
    "LoginUser",
    "LogoutUser",
    "RegisterUser",
    "UpdateUser",
]
