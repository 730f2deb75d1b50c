"""Tests for mapping user errors to HTTP responses."""

import pytest

from chainvault.errors import (
    AccessDeniedError,
    AdminAccessRequiredError,
    AuthenticationRequiredError,
    InvalidSignatureError,
    InvalidTokenError,
    NonceMismatchError,
    NotFoundError,
    UnknownIdentityError,
    UpstreamStorageError,
    ValidationError,
)
from chainvault.web.error_handlers import status_for


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (AuthenticationRequiredError(), (401, "authentication_error")),
        (UnknownIdentityError(), (401, "authentication_error")),
        (NonceMismatchError(), (401, "authentication_error")),
        (InvalidSignatureError(), (401, "authentication_error")),
        (InvalidTokenError(), (403, "invalid_token")),
        (AccessDeniedError(), (403, "access_denied")),
        (AdminAccessRequiredError(), (403, "access_denied")),
        (NotFoundError(), (404, "not_found")),
        (ValidationError("bad"), (400, "validation_error")),
        (UpstreamStorageError(), (500, "upstream_storage_error")),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected
