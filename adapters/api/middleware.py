"""
Middleware for the HTTP API.

- error_middleware: turns exceptions into JSON error responses
- security_headers_middleware: hardening headers + CORS
- admin_auth_middleware: Bearer token check for /api/admin
- FormRateLimiter: per IP + action limit for public form submissions
"""

import json
import logging
import math
import time
from typing import Callable, Dict, Iterable, List, Optional

from aiohttp import web
from postgrest.exceptions import APIError
from pydantic import ValidationError

from core.domain.exceptions import NotFoundError, FormValidationError
from core.interfaces.repositories import IAuthRepository
from infrastructure.database.errors import parse_database_error, error_status

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

ADMIN_PREFIX = "/api/admin"


def error_json(message: str, status: int, details: Optional[List[dict]] = None,
               headers: Optional[dict] = None) -> web.Response:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return web.json_response(body, status=status, headers=headers)


def validation_details(error: ValidationError) -> List[dict]:
    return [
        {"field": ".".join(str(part) for part in item["loc"]), "message": item["msg"]}
        for item in error.errors()
    ]


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ValidationError as e:
        return error_json("Validation failed", 400, validation_details(e))
    except FormValidationError as e:
        details = [{"field": field, "message": msg} for field, msg in e.errors.items()]
        return error_json(str(e), 400, details)
    except NotFoundError as e:
        return error_json(str(e), 404)
    except APIError as e:
        logger.error(f"[API] Database error on {request.method} {request.path}: {e}")
        return error_json(parse_database_error(e), error_status(e))
    except json.JSONDecodeError:
        return error_json("Request body must be valid JSON", 400)
    except Exception as e:
        logger.error(f"[API] Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return error_json("Internal server error", 500)


def security_headers_middleware(cors_origins: List[str]):
    """Adds security headers; echoes CORS headers for allowed origins"""

    def cors_headers(request: web.Request) -> Dict[str, str]:
        origin = request.headers.get("Origin")
        if not origin or ("*" not in cors_origins and origin not in cors_origins):
            return {}
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
            "Access-Control-Allow-Headers": "Authorization, Content-Type",
            "Vary": "Origin",
        }

    @web.middleware
    async def middleware(request: web.Request, handler):
        if request.method == "OPTIONS":
            response = web.Response(status=204)
        else:
            try:
                response = await handler(request)
            except web.HTTPException as e:
                e.headers.update(SECURITY_HEADERS)
                e.headers.update(cors_headers(request))
                raise
        response.headers.update(SECURITY_HEADERS)
        response.headers.update(cors_headers(request))
        return response

    return middleware


def bearer_token(request: web.Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


async def authenticate(request: web.Request, auth_repo: IAuthRepository):
    """Resolve the caller or raise 401"""
    token = bearer_token(request)
    user = await auth_repo.get_user(token) if token else None
    if not user:
        raise web.HTTPUnauthorized(
            text=json.dumps({"error": "Authentication required"}),
            content_type="application/json",
        )
    request["user"] = user
    return user


def admin_auth_middleware(auth_repo: IAuthRepository):
    """Every /api/admin route needs a valid token owned by an admin"""

    @web.middleware
    async def middleware(request: web.Request, handler):
        if request.path.startswith(ADMIN_PREFIX) and request.method != "OPTIONS":
            user = await authenticate(request, auth_repo)
            if not user.is_admin:
                logger.warning(f"[API] Non-admin {user.id} tried {request.method} {request.path}")
                raise web.HTTPForbidden(
                    text=json.dumps({"error": "Admin access required"}),
                    content_type="application/json",
                )
        return await handler(request)

    return middleware


def client_ip(request: web.Request, trusted_proxies: Iterable[str] = ()) -> str:
    """
    Peer address of the request. X-Forwarded-For is honoured only when the
    peer is a trusted proxy; the right-most untrusted hop is the client.
    """
    remote = request.remote or "unknown"
    trusted = set(trusted_proxies)
    if remote not in trusted:
        return remote
    forwarded = request.headers.get("X-Forwarded-For", "")
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    for hop in reversed(hops):
        if hop not in trusted:
            return hop
    return remote


class FormRateLimiter:
    """
    Sliding window limiter: tracks submission timestamps per (ip, action).
    Rejects submissions beyond `limit` within `window` seconds.
    """

    def __init__(self, limit: int = 5, window: int = 900,
                 clock: Callable[[], float] = time.monotonic,
                 trusted_proxies: Iterable[str] = ()):
        self.limit = limit
        self.window = window
        self.trusted_proxies = frozenset(trusted_proxies)
        self._clock = clock
        # {"action:ip": [timestamp, ...]}
        self._hits: Dict[str, List[float]] = {}
        self._last_sweep = clock()

    def _sweep(self, cutoff: float) -> None:
        """Drop keys with no hits inside the window"""
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[key]

    def check(self, identifier: str, action: str) -> Optional[int]:
        """Record a hit. Returns seconds to wait when over the limit, else None"""
        key = f"{action}:{identifier}"
        now = self._clock()
        cutoff = now - self.window
        if now - self._last_sweep >= self.window:
            self._sweep(cutoff)
            self._last_sweep = now

        hits = [ts for ts in self._hits.get(key, []) if ts > cutoff]

        if len(hits) >= self.limit:
            self._hits[key] = hits
            return max(1, math.ceil(hits[0] + self.window - now))

        hits.append(now)
        self._hits[key] = hits
        return None

    def client_ip(self, request: web.Request) -> str:
        return client_ip(request, self.trusted_proxies)

    def enforce(self, request: web.Request, action: str) -> None:
        ip = self.client_ip(request)
        retry_after = self.check(ip, action)
        if retry_after is not None:
            logger.warning(f"[API] Rate limit hit: {action} from {ip}")
            raise web.HTTPTooManyRequests(
                text=json.dumps({
                    "error": "Too many submissions. Please try again later.",
                    "retry_after": retry_after,
                }),
                content_type="application/json",
                headers={"Retry-After": str(retry_after)},
            )
