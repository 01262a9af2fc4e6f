from linguatext.auth.dependencies import get_current_user, parse_user_id

__all__ = [
    "get_current_user",
    "parse_user_id",
]
