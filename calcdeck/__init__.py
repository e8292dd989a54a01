"""Calcdeck — multilingual calculator platform API.

Layout:
    core/            pure calculator model, evaluators, units, formatting
    services/        catalog, guide content and seeding (IO lives here)
    api/             FastAPI routes, dependencies, error handlers
    models/, db/     SQLAlchemy ORM and session plumbing
    data/            calculator definitions and guide content (YAML)

Invariants:
    - Package root has no import side effects
"""
