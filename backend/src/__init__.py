"""
Repurpose Backend

Turns long-form content into platform-ready social posts.

Package Structure:
==================
    src/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, prompts, etc.)
    └── config/     ← Settings and product tables (plans, platforms, models)

Running the Application:
========================
    # API Server
    uvicorn src.api.main:app --reload
"""
