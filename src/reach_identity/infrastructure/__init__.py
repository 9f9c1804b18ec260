"""Infrastructure adapters (persistence, email, OAuth providers)."""
