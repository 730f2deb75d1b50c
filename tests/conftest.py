"""Shared pytest fixtures."""

import hashlib

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from fastapi.testclient import TestClient

from chainvault.app import App
from chainvault.config import Config
from chainvault.core.core import Core
from chainvault.core.modules.auth.signature import build_auth_message
from chainvault.core.repository.memory import MemoryRepository
from chainvault.errors import UpstreamStorageError
from chainvault.web.server import create_fastapi_app

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"


class FakeContentStore:
    """In-memory stand-in for the pinning service."""

    def __init__(self) -> None:
        self.stored: list[tuple[str, bytes]] = []
        self.fail = False

    async def store(self, content: bytes, filename: str) -> str:
        if self.fail:
            raise UpstreamStorageError
        self.stored.append((filename, content))
        return "bafk" + hashlib.sha256(content).hexdigest()[:32]


def sign(account: LocalAccount, message: str) -> str:
    """personal_sign the message and return the 0x-prefixed hex signature."""
    signed = Account.sign_message(encode_defunct(text=message), private_key=account.key)
    return "0x" + bytes(signed.signature).hex()


def sign_nonce(account: LocalAccount, nonce: str) -> str:
    return sign(account, build_auth_message(nonce))


@pytest.fixture
def account() -> LocalAccount:
    return Account.create()


@pytest.fixture
def other_account() -> LocalAccount:
    return Account.create()


@pytest.fixture
def admin_account() -> LocalAccount:
    return Account.create()


@pytest.fixture
def config(admin_account):
    return Config(
        database_url="memory://",
        host="127.0.0.1",
        port=8000,
        debug=True,
        token_secret_key=TEST_SECRET,
        admin_wallets=[admin_account.address.lower()],
    )


@pytest.fixture
def content_store():
    return FakeContentStore()


@pytest.fixture
def repository():
    return MemoryRepository()


@pytest.fixture
def core(config, repository, content_store):
    """Core wired to the in-memory repository; not started."""
    return Core(config, repository, content_store)


@pytest.fixture
def client(config, repository, content_store):
    """Test client running the full application lifespan."""
    app_instance = App(config, repository=repository, content_store=content_store)
    with TestClient(create_fastapi_app(app_instance, config)) as test_client:
        yield test_client


def login(client: TestClient, account: LocalAccount) -> str:
    """Run the nonce/verify flow over HTTP and return the session token."""
    nonce = client.post("/api/auth/nonce", json={"walletAddress": account.address}).json()["nonce"]
    response = client.post(
        "/api/auth/verify",
        json={"walletAddress": account.address, "signature": sign_nonce(account, nonce), "nonce": nonce},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
