"""Shared helpers (logging setup, environment parsing)."""
