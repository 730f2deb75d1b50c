from eth_utils import to_checksum_address

from chainvault.errors import ValidationError
from chainvault.utils import is_wallet_address


def normalize_wallet_address(value: str) -> str:
    """Validate a wallet address and return its canonical checksum form.

    Raises:
        ValidationError: If the value is not `0x` followed by 40 hex digits
    """
    value = value.strip()
    if not is_wallet_address(value):
        raise ValidationError("Invalid wallet address: expected 0x followed by 40 hex characters")
    return to_checksum_address(value)
