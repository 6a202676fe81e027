"""Relational Metadata — declarative Base shared by ORM models and migrations."""
