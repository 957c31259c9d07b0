from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from src.shortlinks.api.deps import get_access_control, get_visitor_id, new_visitor_id
from src.shortlinks.api.v1.endpoints import links, users
from src.shortlinks.core.config import settings, logger
from src.shortlinks.core.exceptions import CapacityExhausted, ShortlinksError
from src.shortlinks.services.access_control import AccessControl

app = FastAPI(
    title="Shortlinks",
    description="""
    A URL shortening service with per-account ownership.

    ## Features
    * Register, log in and log out with email and password
    * Create, update and delete your own short links
    * Redirect anyone holding a short code
    * Track total redirects and unique visitors per link
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
app.include_router(links.router, prefix="/api/v1/links", tags=["links"])


@app.exception_handler(ShortlinksError)
async def shortlinks_error_handler(request: Request, exc: ShortlinksError):
    if isinstance(exc, CapacityExhausted):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/", tags=["root"])
async def root():
    return RedirectResponse("/api/v1/links")


@app.get("/health", tags=["root"])
async def health_check():
    return {"status": "healthy"}


@app.get("/u/{short_code}", tags=["redirect"])
def redirect_to_url(
    short_code: str,
    visitor_id: Optional[str] = Depends(get_visitor_id),
    access: AccessControl = Depends(get_access_control),
):
    issued = not visitor_id
    if issued:
        visitor_id = new_visitor_id()

    destination = access.handle_redirect(visitor_id, short_code)

    response = RedirectResponse(destination, status_code=status.HTTP_302_FOUND)
    if issued:
        response.set_cookie(
            settings.VISITOR_COOKIE_NAME,
            visitor_id,
            max_age=10 * 365 * 24 * 3600,
            httponly=True,
            samesite="lax",
        )
    return response
