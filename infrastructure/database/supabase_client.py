"""
Supabase client initialization.
Single point of database connection, created on first use.
"""

from supabase import create_client, Client
import asyncio
import concurrent.futures
import logging
import os
import sys
from functools import wraps
from typing import Optional

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def _credentials() -> tuple[str, str]:
    # Read env directly (bypass pydantic for reliability)
    url = os.environ.get("SUPABASE_URL", "")
    key = os.environ.get("SUPABASE_SERVICE_KEY") or os.environ.get("SUPABASE_KEY", "")
    return url, key


def check_credentials() -> None:
    """Fail fast at startup when the database is not configured"""
    url, key = _credentials()
    if not url or not key:
        print("❌ ERROR: Supabase credentials not configured!")
        print("   Required env vars: SUPABASE_URL, SUPABASE_SERVICE_KEY (or SUPABASE_KEY)")
        print(f"   SUPABASE_URL: {'set' if url else 'MISSING'}")
        print(f"   SUPABASE_KEY: {'set' if key else 'MISSING'}")
        print("   Hint: check your .env file")
        sys.exit(1)


def get_client() -> Client:
    """Return the shared client, creating it on first call"""
    global _client
    if _client is not None:
        return _client

    url, key = _credentials()
    if not url or not key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY (or SUPABASE_KEY) must be set")

    # Schema isolation: staging can point at a separate schema
    schema = os.environ.get("DB_SCHEMA", "public")
    if schema != "public":
        from supabase.lib.client_options import ClientOptions
        _client = create_client(url, key, options=ClientOptions(schema=schema))
    else:
        _client = create_client(url, key)

    logger.info(f"[DB] Supabase client created (schema={schema})")
    return _client


# Dedicated bounded thread pool for DB operations, so many concurrent
# Supabase calls don't exhaust the default executor.
_db_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=10,
    thread_name_prefix="supabase-db",
)


def run_sync(func):
    """
    Decorator to run synchronous Supabase operations in async context.
    Supabase Python SDK is synchronous, so we need this wrapper.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_db_executor, lambda: func(*args, **kwargs))
    return wrapper
