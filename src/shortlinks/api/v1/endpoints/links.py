from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from src.shortlinks.api.deps import get_access_control, get_session_token
from src.shortlinks.schemas.url import URL, URLCreate, URLDetail, URLUpdate
from src.shortlinks.services.access_control import AccessControl

router = APIRouter()


@router.get("", response_model=list[URL])
def list_links(
    session_token: Optional[str] = Depends(get_session_token),
    access: AccessControl = Depends(get_access_control),
):
    """
    List the caller's shortened URLs.

    Anonymous callers get an empty list rather than an error.
    """
    return access.handle_list_urls(session_token)


@router.post("", response_model=URL, status_code=status.HTTP_201_CREATED)
def create_link(
    url: URLCreate,
    session_token: Optional[str] = Depends(get_session_token),
    access: AccessControl = Depends(get_access_control),
):
    """
    Create a shortened URL.

    Requires authentication.
    """
    short_code = access.handle_create_url(session_token, url.destination)
    return access.handle_view_url(session_token, short_code)


@router.get("/{short_code}", response_model=URLDetail)
def get_link(
    short_code: str,
    session_token: Optional[str] = Depends(get_session_token),
    access: AccessControl = Depends(get_access_control),
):
    """
    Get a shortened URL with its statistics and visit history.

    Only the owner may view it.
    """
    return access.handle_view_url(session_token, short_code)


@router.put("/{short_code}", response_model=URL)
def update_link(
    short_code: str,
    url_update: URLUpdate,
    session_token: Optional[str] = Depends(get_session_token),
    access: AccessControl = Depends(get_access_control),
):
    """
    Point a shortened URL at a new destination.

    Only the owner may update it.
    """
    return access.handle_update_url(session_token, short_code, url_update.destination)


@router.delete("/{short_code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_link(
    short_code: str,
    session_token: Optional[str] = Depends(get_session_token),
    access: AccessControl = Depends(get_access_control),
):
    """
    Delete a shortened URL and its visit history.

    Only the owner may delete it.
    """
    access.handle_delete_url(session_token, short_code)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
