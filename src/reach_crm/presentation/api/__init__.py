"""Reach HTTP API (FastAPI)."""

from reach_crm.presentation.api.app import create_app

__all__ = ["create_app"]
