"""Persistence adapters for the CRM directory."""
