"""
HTTP API adapter (aiohttp).

Public routes serve the website and mobile app: teams, schedules,
live scores, announcements, registration and waiver forms.
Admin routes under /api/admin require a Supabase admin session.
"""

from adapters.api.app import create_api_app, run_api_server

__all__ = ["create_api_app", "run_api_server"]
