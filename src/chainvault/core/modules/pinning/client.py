"""Client for the content-addressed pinning service."""

from typing import Any, Protocol
from urllib.parse import quote

import httpx
import structlog

from chainvault.errors import UpstreamStorageError

logger = structlog.get_logger(__name__)


class ContentStore(Protocol):
    """Stores raw bytes on the storage network and returns their content identifier."""

    async def store(self, content: bytes, filename: str) -> str: ...


class PinningClient:
    """Uploads files to an NFT.Storage-compatible pinning API.

    A missing API token does not prevent construction; every upload fails with
    UpstreamStorageError until a token is configured.
    """

    def __init__(self, api_url: str, api_token: str | None, timeout: float = 60.0) -> None:
        self.api_url = api_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_token)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.api_url, timeout=self.timeout)
        return self._client

    async def store(self, content: bytes, filename: str) -> str:
        """Pin content and return its CID.

        Raises:
            UpstreamStorageError: If the token is missing, the request fails,
                or the response carries no CID
        """
        if not self.api_token:
            logger.error("pinning_token_missing", filename=filename)
            raise UpstreamStorageError("Pinning service token not configured")

        try:
            response = await self.client.post(
                "/upload",
                content=content,
                headers={
                    "Authorization": f"Bearer {self.api_token}",
                    "Content-Type": "application/octet-stream",
                    "X-Name": quote(filename),
                },
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("pinning_upload_failed", filename=filename, error=str(e))
            raise UpstreamStorageError from e

        cid = _extract_cid(payload)
        if not cid:
            logger.error("pinning_upload_failed", filename=filename, error="response without cid")
            raise UpstreamStorageError

        logger.debug("pinning_upload_succeeded", filename=filename, cid=cid, size=len(content))
        return cid

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _extract_cid(payload: Any) -> str | None:
    """Read the CID from `{"value": {"cid": ...}}` or `{"cid": ...}` responses."""
    if not isinstance(payload, dict):
        return None
    value = payload.get("value")
    if isinstance(value, dict) and value.get("cid"):
        return str(value["cid"])
    if payload.get("cid"):
        return str(payload["cid"])
    return None
