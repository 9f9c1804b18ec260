"""Outbound email for activation and password reset."""

from reach_identity.infrastructure.email.email_service import EmailService

__all__ = ["EmailService"]
