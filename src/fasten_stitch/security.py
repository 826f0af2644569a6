from __future__ import annotations

from typing import Final

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

FASTEN_CDN: Final[str] = "https://cdn.fastenhealth.com"
FASTEN_API: Final[str] = "https://api.connect.fastenhealth.com"
FASTEN_WILDCARD: Final[str] = "https://*.fastenhealth.com"

# Directive order is preserved in the rendered header.
CSP_DIRECTIVES: Final[dict[str, list[str]]] = {
    "default-src": ["'self'"],
    "script-src": ["'self'", "'unsafe-inline'", FASTEN_CDN],
    "style-src": ["'self'", "'unsafe-inline'", FASTEN_CDN],
    "connect-src": ["'self'", FASTEN_API, FASTEN_WILDCARD],
    "img-src": ["'self'", "data:", "https:"],
    "font-src": ["'self'", "https:", "data:"],
    "frame-src": ["'self'", FASTEN_WILDCARD],
    "worker-src": ["'self'", "blob:"],
    "child-src": ["'self'", "blob:"],
    "base-uri": ["'self'"],
    "form-action": ["'self'"],
    "frame-ancestors": ["'self'"],
    "object-src": ["'none'"],
    "script-src-attr": ["'none'"],
    "upgrade-insecure-requests": [],
}

CORS_ALLOWED_ORIGINS: Final[list[str]] = [
    "capacitor://localhost",
    "ionic://localhost",
    "http://localhost",
    "https://localhost",
]
# http(s)://localhost on any port.
CORS_ALLOWED_ORIGIN_REGEX: Final[str] = r"https?://localhost(:\d+)?"


def build_content_security_policy(directives: dict[str, list[str]] | None = None) -> str:
    parts: list[str] = []
    for name, sources in (directives or CSP_DIRECTIVES).items():
        parts.append(" ".join([name, *sources]) if sources else name)
    return "; ".join(parts)


def security_headers(csp: str | None = None) -> dict[str, str]:
    return {
        "Content-Security-Policy": csp or build_content_security_policy(),
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
        "Origin-Agent-Cluster": "?1",
        "Referrer-Policy": "no-referrer",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "X-Content-Type-Options": "nosniff",
        "X-DNS-Prefetch-Control": "off",
        "X-Download-Options": "noopen",
        "X-Frame-Options": "SAMEORIGIN",
        "X-Permitted-Cross-Domain-Policies": "none",
        "X-XSS-Protection": "0",
    }


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp the fixed security header set onto every response.

    Headers already present on the response are left alone.
    """

    def __init__(self, app, headers: dict[str, str] | None = None) -> None:
        super().__init__(app)
        self._headers = headers or security_headers()

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in self._headers.items():
            if name not in response.headers:
                response.headers[name] = value
        return response


def install_security(app: FastAPI) -> None:
    # Added last so the security headers wrap CORS preflight responses too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_origin_regex=CORS_ALLOWED_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
