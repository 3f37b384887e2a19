"""
Adapters Package

External service integrations.

Contents:
=========
- openai_adapter: OpenAI chat completions (retry + fallback) and transcription
- redis_adapter: Redis counters for per-plan rate limiting

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from src.shared.adapters.openai_adapter import OpenAIAdapter
    from src.shared.adapters.redis_adapter import RedisAdapter
"""
