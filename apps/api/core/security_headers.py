"""
Security headers for every response.

The web client embeds workout videos from the Vimeo player and loads
thumbnails from the configured thumbnail host, so the Content-Security-Policy
is built from settings rather than hard-coded.
"""
from urllib.parse import urlsplit

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from core.config import settings


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def build_content_security_policy() -> str:
    player = _origin(settings.VIMEO_PLAYER_BASE_URL)
    thumbnails = _origin(settings.VIMEO_THUMBNAIL_BASE_URL)
    connect_src = "'self'"
    if settings.SUPABASE_URL:
        connect_src += f" {_origin(settings.SUPABASE_URL)}"
    return (
        "default-src 'self'; "
        f"img-src 'self' data: {thumbnails} https://i.vimeocdn.com; "
        f"frame-src {player}; "
        f"connect-src {connect_src}; "
        "frame-ancestors 'none';"
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """HSTS and CSP are skipped in DEBUG so local HTTP and the docs UI keep working."""

    def __init__(self, app):
        super().__init__(app)
        self.content_security_policy = build_content_security_policy()
        self.permissions_policy = (
            "camera=(), geolocation=(), microphone=(), payment=(), "
            f"fullscreen=(self \"{_origin(settings.VIMEO_PLAYER_BASE_URL)}\")"
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = self.permissions_policy

        if not settings.DEBUG:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
            response.headers["Content-Security-Policy"] = self.content_security_policy

        return response
