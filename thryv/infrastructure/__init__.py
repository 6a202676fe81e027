"""Infrastructure Layer — store adapters, auth verification, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every external failure is mapped to a ThryvError at this boundary
"""
