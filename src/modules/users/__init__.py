"""Profile management module."""

from src.modules.users.service import UserService

__all__ = ["UserService"]
