"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer (generation, editing, quota, cache)
- Prompts: Platform templates, brand voice and series framing
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: OpenAI and Redis clients

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── prompts/        ← Prompt templates
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External services
    └── utils/          ← Sanitizing, validation, JWT, time

Usage:
======
    from src.shared.models import Project, Output
    from src.shared.repositories import ProjectRepository
    from src.shared.services import GenerationService
    from src.shared.schemas import ProjectCreate, ProjectResponse
    from src.shared.core import logger, RepurposeException
"""
