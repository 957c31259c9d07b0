from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from src.shortlinks.api.deps import (
    clear_session_cookie,
    get_access_control,
    get_session_token,
    set_session_cookie,
)
from src.shortlinks.core.exceptions import NotAuthenticated
from src.shortlinks.schemas.user import Account, Credentials
from src.shortlinks.services.access_control import AccessControl

router = APIRouter()


@router.post("/register", response_model=Account, status_code=status.HTTP_201_CREATED)
def register(
    credentials: Credentials,
    response: Response,
    access: AccessControl = Depends(get_access_control),
):
    """
    Register a new account.

    Logs the new account in by setting the session cookie.
    """
    account, token = access.handle_register(credentials.email, credentials.password)
    set_session_cookie(response, token)
    return account


@router.post("/login", response_model=Account)
def login(
    credentials: Credentials,
    response: Response,
    access: AccessControl = Depends(get_access_control),
):
    """
    Login with email and password.

    Sets the session cookie used to authenticate subsequent requests.
    """
    account, token = access.handle_login(credentials.email, credentials.password)
    set_session_cookie(response, token)
    return account


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    access: AccessControl = Depends(get_access_control),
):
    access.handle_logout(session_token)
    clear_session_cookie(response)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=Account)
def read_current_account(
    session_token: Optional[str] = Depends(get_session_token),
    access: AccessControl = Depends(get_access_control),
):
    account = access.handle_current_account(session_token)
    if account is None:
        raise NotAuthenticated()
    return account
