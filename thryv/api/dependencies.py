"""Route Dependencies — auth and service wiring for FastAPI routes.

Invariants:
    - Resource routes depend on get_current_identity; no route reads credentials itself
    - Services are built per request from the request-scoped session / table
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from thryv.config import get_settings
from thryv.core.errors import AuthenticationError
from thryv.core.repository_protocols import KeyValueTable
from thryv.infrastructure.auth import Identity, verify_token
from thryv.infrastructure.customer_repository import CustomerRepository
from thryv.infrastructure.database import get_db
from thryv.infrastructure.dynamodb import get_company_table
from thryv.services.company_service import CompanyService
from thryv.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ANONYMOUS = Identity(subject="anonymous")


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    settings = get_settings()
    if not settings.auth_enabled:
        return ANONYMOUS
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Missing bearer token")
    identity = verify_token(
        credentials.credentials,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )
    logger.debug("Request authenticated", extra={"subject": identity.subject})
    return identity


async def get_customer_service(
    db: AsyncSession = Depends(get_db),
) -> CustomerService:
    return CustomerService(CustomerRepository(db))


async def get_company_service(
    table: KeyValueTable = Depends(get_company_table),
) -> CompanyService:
    return CompanyService(table, get_settings().company_identification_index)
