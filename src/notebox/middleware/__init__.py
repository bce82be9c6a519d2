"""Middleware for authentication and other cross-cutting concerns."""

from .auth import CurrentUser, get_current_user, get_current_user_id, get_session_token

__all__ = ["CurrentUser", "get_current_user", "get_current_user_id", "get_session_token"]
