"""Persistence Models — one module per stored entity.

Invariants:
    - Customer is a SQLAlchemy model (relational store)
    - Company is a plain dataclass mapped to/from DynamoDB items (key-value store)

Design Decisions:
    - ORM models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from thryv.models.customer import Customer  # noqa: F401
