"""
HTTP API application factory.
"""

import logging
from typing import Optional

from aiohttp import web

from config.settings import Settings, settings as default_settings
from config.features import features
from adapters.loader import Services
from adapters.api.middleware import (
    FormRateLimiter,
    error_middleware,
    security_headers_middleware,
    admin_auth_middleware,
)
from adapters.api.public import setup_public_routes
from adapters.api.admin import setup_admin_routes

logger = logging.getLogger(__name__)


def create_api_app(services: Services, settings: Optional[Settings] = None,
                   limiter: Optional[FormRateLimiter] = None) -> web.Application:
    settings = settings or default_settings
    limiter = limiter or FormRateLimiter(
        limit=features.FORM_RATE_LIMIT,
        window=features.FORM_RATE_WINDOW_SECONDS,
        trusted_proxies=settings.trusted_proxies,
    )

    app = web.Application(middlewares=[
        security_headers_middleware(settings.cors_origins),
        error_middleware,
        admin_auth_middleware(services.auth),
    ])

    setup_public_routes(app, services, limiter)
    setup_admin_routes(app, services)

    logger.info(f"[API] {len(app.router.routes())} routes registered")
    return app


async def run_api_server(services: Services, settings: Optional[Settings] = None) -> web.AppRunner:
    """Start the API on api_host:api_port. Caller owns runner.cleanup()"""
    settings = settings or default_settings
    runner = web.AppRunner(create_api_app(services, settings))
    await runner.setup()
    site = web.TCPSite(runner, settings.api_host, settings.api_port)
    await site.start()
    logger.info(f"API running on {settings.api_host}:{settings.api_port}")
    return runner
