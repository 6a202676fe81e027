"""Core Layer — pure domain logic, no IO, no DB clients.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or models/
    - Validation, lifecycle transitions, cursor codec and page math are pure functions

Design Decisions:
    - Functional core separated from the imperative shell (services + infrastructure)
"""
