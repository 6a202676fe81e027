"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own the validate → lifecycle/pagination → store sequence
    - Store access only through repositories / KeyValueTable (never raw clients)
    - Errors raised as ThryvError subclasses; the API layer renders them
"""
