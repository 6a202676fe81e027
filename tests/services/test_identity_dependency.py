"""Identity dependency — bearer credentials to Identity, subject logged."""

import json
import logging

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from thryv.api.dependencies import get_current_identity
from thryv.core.errors import AuthenticationError
from thryv.infrastructure.observability import JSONFormatter


def _credentials(auth_headers) -> HTTPAuthorizationCredentials:
    scheme, token = auth_headers["Authorization"].split(" ", 1)
    return HTTPAuthorizationCredentials(scheme=scheme, credentials=token)


async def test_valid_token_logs_subject(auth_headers, caplog):
    with caplog.at_level(logging.DEBUG, logger="thryv.api.dependencies"):
        identity = await get_current_identity(_credentials(auth_headers))

    assert identity.subject == "user-123"
    (record,) = [r for r in caplog.records if r.name == "thryv.api.dependencies"]
    assert record.subject == "user-123"
    assert json.loads(JSONFormatter().format(record))["subject"] == "user-123"


async def test_missing_credentials_rejected():
    with pytest.raises(AuthenticationError):
        await get_current_identity(None)
