import re
from datetime import UTC, datetime

WALLET_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_wallet_address(value: str) -> bool:
    return bool(WALLET_ADDRESS_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)
