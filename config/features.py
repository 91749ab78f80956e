"""
Feature Flags - Easy on/off toggle for features.
Change values here to enable/disable functionality.
"""

import os


class Features:
    """Feature toggles - set via env vars or defaults"""

    # === SURFACES ===
    TELEGRAM_ENABLED: bool = os.getenv("TELEGRAM_ENABLED", "true").lower() == "true"
    SCHEDULER_ENABLED: bool = os.getenv("SCHEDULER_ENABLED", "true").lower() == "true"
    SCHEDULER_INTERVAL_SECONDS: int = int(os.getenv("SCHEDULER_INTERVAL_SECONDS", "3600"))

    # === NOTIFICATIONS ===
    PUSH_ENABLED: bool = os.getenv("PUSH_ENABLED", "true").lower() == "true"
    NOTIFY_ON_ANNOUNCEMENT: bool = os.getenv("NOTIFY_ON_ANNOUNCEMENT", "true").lower() == "true"

    # === FORM RATE LIMITING ===
    FORM_RATE_LIMIT: int = int(os.getenv("FORM_RATE_LIMIT", "5"))
    FORM_RATE_WINDOW_SECONDS: int = int(os.getenv("FORM_RATE_WINDOW_SECONDS", "900"))  # 15 minutes

    # === CONTENT ===
    CONTENT_CACHE_SECONDS: int = int(os.getenv("CONTENT_CACHE_SECONDS", "300"))  # 5 minutes

    # === DEBUG ===
    DEBUG_MODE: bool = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def to_dict(cls) -> dict:
        """Get all features as dict (useful for logging)"""
        return {
            "telegram_enabled": cls.TELEGRAM_ENABLED,
            "scheduler_enabled": cls.SCHEDULER_ENABLED,
            "scheduler_interval_seconds": cls.SCHEDULER_INTERVAL_SECONDS,
            "push_enabled": cls.PUSH_ENABLED,
            "notify_on_announcement": cls.NOTIFY_ON_ANNOUNCEMENT,
            "form_rate_limit": cls.FORM_RATE_LIMIT,
            "form_rate_window_seconds": cls.FORM_RATE_WINDOW_SECONDS,
            "content_cache_seconds": cls.CONTENT_CACHE_SECONDS,
            "debug_mode": cls.DEBUG_MODE,
        }


# Shortcut
features = Features()
