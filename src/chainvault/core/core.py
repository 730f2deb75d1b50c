from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from chainvault.config import Config
from chainvault.core.modules.pinning.client import ContentStore, PinningClient
from chainvault.core.repository.base import Repository


class Service:
    """A unit of business logic. Reads and writes through the shared repository."""

    def __init__(self, repository: Repository) -> None:
        self.repository = repository
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Hook run once when the application starts."""

    async def on_stop(self) -> None:
        """Hook run once when the application stops."""

    @property
    def core(self) -> Core:
        """Owning Core, for config and sibling services."""
        if self._core is None:
            raise RuntimeError(f"{type(self).__name__} is not attached to a Core")
        return self._core

    def set_core(self, core: Core) -> None:
        self._core = core


class Services:
    """All service instances, reachable as attributes (`services.auth`, `services.file`, ...)."""

    from chainvault.core.modules.access.service import AccessService  # noqa: PLC0415
    from chainvault.core.modules.audit.service import AuditService  # noqa: PLC0415
    from chainvault.core.modules.auth.service import AuthService  # noqa: PLC0415
    from chainvault.core.modules.file.service import FileService  # noqa: PLC0415
    from chainvault.core.modules.session.service import SessionService  # noqa: PLC0415
    from chainvault.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    session: SessionService
    auth: AuthService
    access: AccessService
    audit: AuditService
    file: FileService

    def __init__(self, repository: Repository) -> None:
        # Startup order: admin wallets are promoted before any login can happen
        registry: list[tuple[str, type[Service]]] = [
            ("user", self.UserService),
            ("session", self.SessionService),
            ("auth", self.AuthService),
            ("access", self.AccessService),
            ("audit", self.AuditService),
            ("file", self.FileService),
        ]
        self._services: list[Service] = []
        for name, service_class in registry:
            service = service_class(repository)
            setattr(self, name, service)
            self._services.append(service)

    def set_core(self, core: Core) -> None:
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


def create_repository(database_url: str) -> Repository:
    """Pick the repository backend from the database URL scheme."""
    if database_url.startswith("memory://"):
        from chainvault.core.repository.memory import MemoryRepository  # noqa: PLC0415

        return MemoryRepository()
    if database_url.startswith(("mongodb://", "mongodb+srv://")):
        from chainvault.core.repository.mongo import MongoRepository  # noqa: PLC0415

        return MongoRepository(database_url)
    raise ValueError(f"Unsupported database URL scheme: {database_url}")


class Core:
    """Holds config, repository, content store and the service registry.

    Repository and content store are injected for tests; by default they are
    built from config.
    """

    config: Config
    repository: Repository
    content_store: ContentStore
    services: Services

    def __init__(
        self, config: Config, repository: Repository | None = None, content_store: ContentStore | None = None
    ) -> None:
        self.config = config
        self.repository = repository or create_repository(config.database_url)
        self.content_store = content_store or PinningClient(
            config.pinning_api_url, config.pinning_api_token, config.pinning_timeout
        )
        self.services = Services(self.repository)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        await self.repository.on_start()
        try:
            await self.services.start_all()
            yield
        finally:
            await self.services.stop_all()
            if isinstance(self.content_store, PinningClient):
                await self.content_store.close()
            await self.repository.on_stop()
