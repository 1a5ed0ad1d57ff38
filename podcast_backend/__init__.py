"""
Podcast Backend: Application Package
=====================================

What: GraphQL backend for a podcast-hosting service (accounts, podcasts, episodes).
Who:  Imported by uvicorn (`podcast_backend.main:app`), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes + GraphQL resolvers (API)  │  ← HTTP / GraphQL concerns only
    ├─────────────────────────────────────┤
    │   Access Guard                      │  ← X-JWT header → identity context
    ├─────────────────────────────────────┤
    │   Account / Catalog services        │  ← business rules, {ok, error} envelopes
    ├─────────────────────────────────────┤
    │   Credential store, token service   │  ← bcrypt hashes, signed tokens
    ├─────────────────────────────────────┤
    │   Store + repositories              │  ← one unit of work per operation
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Collaborators are passed to constructors explicitly; `main.create_app()`
    is the only place where the object graph is assembled.
"""

__version__ = "1.0.0"
