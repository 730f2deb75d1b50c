import logging
from collections.abc import MutableMapping
from typing import Any

import structlog

NOISY_LOGGERS = ("pymongo", "httpx", "httpcore")

# Event keys whose values grant access and must never reach log output
CREDENTIAL_KEYS = frozenset({"token", "auth_token", "signature", "nonce", "api_token", "authorization"})
REDACTED = "***"


def redact_credentials(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Mask bearer tokens, wallet signatures and nonces passed as log fields."""
    for key in CREDENTIAL_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def build_processors(debug: bool) -> list[structlog.types.Processor]:
    renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        redact_credentials,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def setup_logging(debug: bool) -> None:
    """Route structlog through stdlib logging; console output in debug, JSON lines otherwise."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format="%(message)s")
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(debug),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
