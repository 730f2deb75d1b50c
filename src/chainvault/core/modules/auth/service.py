import structlog

from chainvault.core.core import Service
from chainvault.core.modules.auth.models import LoginResult
from chainvault.core.modules.auth.signature import build_auth_message, generate_nonce, verify_signature
from chainvault.core.modules.user.validators import normalize_wallet_address
from chainvault.errors import InvalidSignatureError, NonceMismatchError, UnknownIdentityError

logger = structlog.get_logger(__name__)


class AuthService(Service):
    """Wallet challenge/response login."""

    async def issue_nonce(self, wallet_address: str) -> str:
        """Store a fresh nonce for the wallet, creating the user on first contact.

        Any earlier pending nonce for the wallet is overwritten and can no longer
        be used to log in.

        Raises:
            ValidationError: If the address is malformed
        """
        wallet_address = normalize_wallet_address(wallet_address)
        nonce = generate_nonce()
        is_admin = self.core.services.user.is_admin_wallet(wallet_address)
        user = await self.repository.upsert_user_nonce(wallet_address, nonce, is_admin=is_admin)
        logger.debug("nonce_issued", user_id=user.id, wallet_address=wallet_address)
        return nonce

    async def verify_and_login(self, wallet_address: str, signature: str, nonce: str) -> LoginResult:
        """Check the signed challenge, consume the nonce and mint a session token.

        A rejected attempt leaves the stored nonce untouched. The nonce is cleared
        with a compare-and-clear, so a signature can mint at most one token.

        Raises:
            ValidationError: If the address is malformed
            UnknownIdentityError: If the wallet never requested a nonce
            NonceMismatchError: If the nonce is not the current pending one
            InvalidSignatureError: If the signature does not recover to the wallet
        """
        wallet_address = normalize_wallet_address(wallet_address)

        user = await self.core.services.user.get_user_by_wallet(wallet_address)
        if user is None:
            logger.info("login_rejected", wallet_address=wallet_address, reason="unknown_identity")
            raise UnknownIdentityError

        if user.nonce is None or user.nonce != nonce:
            logger.info("login_rejected", user_id=user.id, reason="nonce_mismatch")
            raise NonceMismatchError

        if not verify_signature(build_auth_message(nonce), signature, wallet_address):
            logger.info("login_rejected", user_id=user.id, reason="invalid_signature")
            raise InvalidSignatureError

        if not await self.repository.clear_nonce_if_matches(user.id, nonce):
            # Another login consumed or replaced the nonce after our read
            logger.info("login_rejected", user_id=user.id, reason="nonce_consumed")
            raise NonceMismatchError

        token = self.core.services.session.create_token(user.id)
        logger.info("login_succeeded", user_id=user.id, is_admin=user.is_admin)
        return LoginResult(token=token, is_admin=user.is_admin)
