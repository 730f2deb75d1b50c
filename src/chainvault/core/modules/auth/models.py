from pydantic import Field

from chainvault.core.db import ApiModel
from chainvault.utils import WALLET_ADDRESS_RE

WALLET_ADDRESS_PATTERN = WALLET_ADDRESS_RE.pattern


class NonceRequest(ApiModel):
    """Request a login challenge for a wallet."""

    wallet_address: str = Field(..., pattern=WALLET_ADDRESS_PATTERN, description="Wallet address (0x + 40 hex)")


class NonceResponse(ApiModel):
    nonce: str = Field(..., description="Single-use challenge to embed in the signed message")


class VerifyRequest(ApiModel):
    """Submit a signed challenge."""

    wallet_address: str = Field(..., pattern=WALLET_ADDRESS_PATTERN, description="Wallet address (0x + 40 hex)")
    signature: str = Field(..., min_length=1, description="Hex signature of the authentication message")
    nonce: str = Field(..., min_length=1, description="Nonce received from the nonce endpoint")


class LoginResult(ApiModel):
    """Successful login: session token plus the admin flag at login time."""

    token: str = Field(..., description="Bearer token for subsequent requests")
    is_admin: bool = Field(..., description="Admin status at login time (UI hint only)")
