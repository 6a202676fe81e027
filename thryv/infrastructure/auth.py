"""Bearer Token Verification — turns an upstream-issued JWT into a trusted Identity.

Invariants:
    - Signature, expiry, and (when configured) audience/issuer are verified
    - Any failure raises AuthenticationError; the token contents are never logged
    - The rest of the service only ever sees Identity, never the raw token
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from jose import JWTError, jwt

from thryv.core.errors import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    subject: str
    claims: dict[str, Any] = field(default_factory=dict)


def verify_token(
    token: str,
    secret: str,
    algorithm: str = "HS256",
    audience: str | None = None,
    issuer: str | None = None,
) -> Identity:
    options = {"verify_aud": audience is not None}
    try:
        claims = jwt.decode(
            token, secret, algorithms=[algorithm],
            audience=audience, issuer=issuer, options=options,
        )
    except JWTError as e:
        logger.warning(f"Bearer token rejected: {type(e).__name__}")
        raise AuthenticationError("Invalid or expired token") from e
    subject = claims.get("sub")
    if not subject:
        raise AuthenticationError("Token has no subject")
    return Identity(subject=str(subject), claims=claims)
