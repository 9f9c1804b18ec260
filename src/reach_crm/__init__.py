"""Reach CRM - HTTP API, directory and command line entry points.

Architecture:
    reach_crm/
    ├── domain/            # Contact cards
    ├── application/       # Directory service
    ├── infrastructure/    # SQLAlchemy models and repositories
    └── presentation/
        ├── api/           # FastAPI app factory, routers, schemas
        └── cli/           # `reach` command (Typer)

Authentication and user identity live in reach_auth and reach_identity.
"""
