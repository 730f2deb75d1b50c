"""Session credential models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)


class SessionClaims(BaseModel):
    """Decoded claims of a session token.

    The token carries no admin flag; admin status is read from the user record
    on every admin-scoped request.
    """

    user_id: UUID
    issued_at: datetime
    expires_at: datetime
