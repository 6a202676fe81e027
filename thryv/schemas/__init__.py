"""Pydantic Schemas — request/response contracts for the REST endpoints.

Invariants:
    - Schemas check shape and types only; domain invariants live in core/validation
    - Wire names are camelCase (dateBorn, createDate, nextKey); Python names snake_case
    - Update schemas are partial patches: model_fields_set tells absent from null

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )
