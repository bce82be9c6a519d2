"""Security utilities."""

from .jwt import (
    TokenError,
    TokenExpired,
    create_session_token,
    decode_session_token,
    get_user_id_from_token,
)
from .password import dummy_verify, hash_password, needs_update, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "dummy_verify",
    "needs_update",
    "create_session_token",
    "decode_session_token",
    "get_user_id_from_token",
    "TokenError",
    "TokenExpired",
]
