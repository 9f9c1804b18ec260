"""CRM domain (directory data outside the identity core)."""
