"""
Data sources for the browser session.
Both expose the same two async calls; the session does not care whether
the items come through the proxy API or straight from ChromaDB.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol
import asyncio
import httpx
from pydantic import ValidationError

from chroma_viewer.core.config import settings
from chroma_viewer.core.errors import ChromaConnectionError, MissingFieldError
from chroma_viewer.models.item import Item
from chroma_viewer.services.collection_service import CollectionService


class ViewerBackend(Protocol):
    async def list_collections(self, url: str) -> List[str]:
        ...

    async def fetch_items(self, url: str, collection_name: str) -> List[Item]:
        ...


def _error_from_response(response: httpx.Response) -> Exception:
    try:
        message = response.json().get("error")
    except (ValueError, AttributeError):
        message = None
    message = message or f"{response.status_code} {response.reason_phrase}".strip()
    if response.status_code == 400:
        return MissingFieldError(message)
    return ChromaConnectionError(message)


class HttpViewerBackend:
    """
    Talks to the proxy API (POST /collections, POST /collection-data).
    The httpx client is created lazily and reused until close().
    """

    def __init__(self, api_base: str | None = None, client: Optional[httpx.AsyncClient] = None) -> None:
        self.api_base = (api_base or settings.VIEWER_API_BASE).rstrip("/")
        self._client = client

    async def connect(self) -> None:
        if not self._client:
            self._client = httpx.AsyncClient()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        await self.connect()
        try:
            r = await self._client.post(f"{self.api_base}{path}", json=body)
        except httpx.HTTPError as e:
            raise ChromaConnectionError(f"Cannot reach viewer API at {self.api_base}: {e}")
        if r.status_code >= 400:
            raise _error_from_response(r)
        try:
            data = r.json()
        except ValueError as e:
            raise ChromaConnectionError.from_exception(e)
        if data is not None and not isinstance(data, list):
            raise ChromaConnectionError(f"Unexpected response from viewer API: {type(data).__name__}")
        return data or []

    async def list_collections(self, url: str) -> List[str]:
        data = await self._post("/collections", {"url": url})
        return [str(name) for name in data]

    async def fetch_items(self, url: str, collection_name: str) -> List[Item]:
        data = await self._post("/collection-data", {"url": url, "collectionName": collection_name})
        try:
            return [Item(**row) for row in data]
        # a row that is not a JSON object cannot be unpacked into an Item
        except (ValidationError, TypeError) as e:
            raise ChromaConnectionError.from_exception(e)


class LocalViewerBackend:
    """Calls the collection service in-process, off the event loop."""

    def __init__(self, service: CollectionService | None = None) -> None:
        self.service = service or CollectionService()

    async def list_collections(self, url: str) -> List[str]:
        if not url:
            raise MissingFieldError("ChromaDB URL is required")
        return await asyncio.to_thread(self.service.list_collections, url)

    async def fetch_items(self, url: str, collection_name: str) -> List[Item]:
        if not url or not collection_name:
            raise MissingFieldError("ChromaDB URL and collection name are required")
        return await asyncio.to_thread(self.service.fetch_items, url, collection_name)

    async def close(self) -> None:
        return None
