"""Thryv Backend — Company and Customer registry service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
