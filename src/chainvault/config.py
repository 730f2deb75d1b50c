from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # mongodb://host:port/dbname, or memory:// for a process-local store
    host: str
    port: int
    debug: bool
    token_secret_key: str  # HS256 secret for session tokens
    token_algorithm: str = "HS256"
    token_expire_seconds: int = 7 * 24 * 60 * 60
    pinning_api_url: str = "https://api.nft.storage"
    pinning_api_token: str | None = None  # Uploads fail until this is set
    pinning_timeout: float = 60.0
    max_upload_size: int = 10 * 1024 * 1024
    admin_wallets: list[str] = []  # Wallet addresses promoted to admin on startup
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "CHAINVAULT_",
        "extra": "ignore",
    }
