from datetime import datetime
from uuid import UUID

from pydantic import Field

from chainvault.core.db import ApiModel, MongoModel
from chainvault.utils import now


class User(MongoModel):
    """Wallet identity.

    `wallet_address` is stored in EIP-55 checksum form, so equal addresses
    compare equal whatever case the client sent. `nonce` is set only between
    nonce issuance and a successful login.
    """

    wallet_address: str
    nonce: str | None = None
    is_admin: bool = False
    created_at: datetime = Field(default_factory=now)


class UserView(ApiModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    wallet_address: str = Field(..., description="Checksummed wallet address")
    is_admin: bool = Field(..., description="Whether the user has admin access")
    created_at: datetime = Field(..., description="When the wallet first requested a nonce")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, wallet_address=user.wallet_address, is_admin=user.is_admin, created_at=user.created_at)
