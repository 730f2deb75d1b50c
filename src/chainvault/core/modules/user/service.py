from uuid import UUID

import structlog

from chainvault.core.core import Service
from chainvault.core.modules.user.models import User
from chainvault.core.modules.user.validators import normalize_wallet_address
from chainvault.errors import NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Identity store: wallet address to user record."""

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID."""
        user = await self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    async def find_user(self, user_id: UUID) -> User | None:
        return await self.repository.get_user(user_id)

    async def get_user_by_wallet(self, wallet_address: str) -> User | None:
        """Look up a user by wallet address in any letter case.

        Raises:
            ValidationError: If the address is malformed
        """
        return await self.repository.get_user_by_wallet(normalize_wallet_address(wallet_address))

    async def get_wallet_addresses(self, user_ids: list[UUID]) -> dict[UUID, str]:
        users = await self.repository.get_users(user_ids)
        return {user_id: user.wallet_address for user_id, user in users.items()}

    def is_admin_wallet(self, wallet_address: str) -> bool:
        """Check whether the canonical address is listed in the admin_wallets config."""
        return wallet_address in self._admin_wallets()

    async def ensure_admin_wallets(self) -> None:
        """Promote configured admin wallets, creating their records if missing."""
        for wallet_address in self._admin_wallets():
            user = await self.repository.set_admin(wallet_address, True)
            logger.info("admin_wallet_promoted", user_id=user.id, wallet_address=wallet_address)

    def _admin_wallets(self) -> set[str]:
        return {normalize_wallet_address(address) for address in self.core.config.admin_wallets}

    async def on_start(self) -> None:
        await self.ensure_admin_wallets()
