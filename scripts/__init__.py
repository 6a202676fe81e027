"""Operational scripts (table provisioning)."""
