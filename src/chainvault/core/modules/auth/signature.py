"""Wallet signature helpers.

Login challenge flow:
1. Server issues a random numeric nonce -> generate_nonce()
2. Wallet signs build_auth_message(nonce) with personal_sign (EIP-191 prefix, secp256k1)
3. Server recovers the signer -> verify_signature() and compares it to the claimed address
"""

import secrets

import structlog
from eth_account import Account
from eth_account.messages import encode_defunct

logger = structlog.get_logger(__name__)

AUTH_MESSAGE_TEMPLATE = "Sign this message to authenticate with Web3 Dashboard.\n\nNonce: {nonce}"
NONCE_UPPER_BOUND = 10**12


def generate_nonce() -> str:
    """Return a cryptographically random integer in [0, 10^12) as decimal text."""
    return str(secrets.randbelow(NONCE_UPPER_BOUND))


def build_auth_message(nonce: str) -> str:
    """Return the exact text the wallet must sign for this nonce."""
    return AUTH_MESSAGE_TEMPLATE.format(nonce=nonce)


def recover_address(message: str, signature: str) -> str | None:
    """Recover the signing address, or None if the signature cannot be recovered."""
    try:
        return str(Account.recover_message(encode_defunct(text=message), signature=signature))
    except Exception as e:  # noqa: BLE001
        # Any undecodable signature is a failed verification
        logger.debug("signature_recovery_failed", error=str(e))
        return None


def verify_signature(message: str, signature: str, claimed_address: str) -> bool:
    """Check that `signature` over `message` was produced by `claimed_address`.

    Address comparison is case-insensitive. Never raises.
    """
    recovered = recover_address(message, signature)
    if recovered is None:
        return False
    return recovered.lower() == claimed_address.strip().lower()
