from functools import lru_cache
from typing import Optional

from fastapi import Cookie, Response

from src.shortlinks.core.config import settings
from src.shortlinks.db.session import Database
from src.shortlinks.services.access_control import AccessControl
from src.shortlinks.services.shortcode import generate_short_code


@lru_cache()
def get_access_control() -> AccessControl:
    """
    Get the process-wide access control facade (singleton).

    Tests override this dependency with a facade on a fresh database.
    """
    return AccessControl.from_database(Database())


def get_session_token(
    session_token: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
) -> Optional[str]:
    return session_token


def set_session_cookie(response: Response, token: str):
    response.set_cookie(settings.SESSION_COOKIE_NAME, token, httponly=True, samesite="lax")


def clear_session_cookie(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


def get_visitor_id(
    visitor_id: Optional[str] = Cookie(default=None, alias=settings.VISITOR_COOKIE_NAME),
) -> Optional[str]:
    return visitor_id


def new_visitor_id() -> str:
    return generate_short_code(settings.VISITOR_TOKEN_LENGTH)
