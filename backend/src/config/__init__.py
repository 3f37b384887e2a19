"""
Configuration Module

Application configuration loaded from environment variables, plus the
static product tables (plans, platforms, model parameters).

Usage:
======
    from src.config.settings import settings
    from src.config.plans import Plan, PLAN_LIMITS
    from src.config.ai_models import get_generation_config

    db_url = settings.DATABASE_URL
    limits = PLAN_LIMITS[Plan.PRO]
"""

from src.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
