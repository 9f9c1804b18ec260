"""CRM application layer."""
