"""Infrastructure adapters for the CRM directory."""
