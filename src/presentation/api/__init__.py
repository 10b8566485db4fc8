"""Versioned API routers (currently v1 only)."""
