from __future__ import annotations
from typing import Any, Dict, List, Tuple
from urllib.parse import urlparse
import chromadb

DEFAULT_PORT = 8000
# collection.get() leaves embeddings out unless asked for them
GET_INCLUDE = ["documents", "metadatas", "embeddings"]


def parse_endpoint(url: str) -> Tuple[str, int, bool]:
    """Split an endpoint URL like http://host:port into (host, port, ssl)."""
    raw = url.strip()
    if "://" not in raw:
        raw = f"http://{raw}"
    parsed = urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"Invalid ChromaDB URL: {url}")
    ssl = parsed.scheme == "https"
    port = parsed.port or (443 if ssl else DEFAULT_PORT)
    return parsed.hostname, port, ssl


class ChromaProvider:
    """Minimal ChromaDB HTTP client for one endpoint. A new one is opened per request."""
    def __init__(self, url: str) -> None:
        self.url = url
        host, port, ssl = parse_endpoint(url)
        self._client = chromadb.HttpClient(host=host, port=port, ssl=ssl)

    def list_collections(self) -> List[Any]:
        # Depending on the chromadb release these are names or Collection objects.
        return list(self._client.list_collections())

    def get_collection_contents(self, name: str) -> Dict[str, Any]:
        collection = self._client.get_collection(name=name)
        return collection.get(include=GET_INCLUDE)
