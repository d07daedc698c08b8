from __future__ import annotations
from typing import Any, Callable, List, Mapping, Optional
import logging

from chroma_viewer.adapters.vector_db_providers.chroma_provider import ChromaProvider
from chroma_viewer.core.errors import ChromaConnectionError
from chroma_viewer.models.item import Item

logger = logging.getLogger(__name__)


def _collection_name(entry: Any) -> str:
    # Either a bare name or a record carrying one.
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        return str(entry["name"])
    return str(entry.name)


def normalize_collection_names(entries: Optional[List[Any]]) -> List[str]:
    """Plain, distinct names in the order the endpoint reported them."""
    if not entries:
        return []
    return list(dict.fromkeys(_collection_name(e) for e in entries))


def _column(result: Any, key: str) -> Any:
    if isinstance(result, Mapping):
        return result.get(key)
    return getattr(result, key, None)


def _at(column: Any, index: int) -> Any:
    # Arrays may be missing or shorter than ids; never index past the end.
    if column is None or index >= len(column):
        return None
    return column[index]


def assemble_items(result: Any) -> List[Item]:
    """
    Zip the parallel ids/metadatas/documents/embeddings arrays of a
    collection.get() result into Item records, aligned by position.
    """
    if result is None:
        return []
    ids = _column(result, "ids")
    if ids is None or len(ids) == 0:
        return []
    metadatas = _column(result, "metadatas")
    documents = _column(result, "documents")
    embeddings = _column(result, "embeddings")

    items: List[Item] = []
    for i, item_id in enumerate(ids):
        items.append(
            Item(
                id=item_id,
                metadata=_at(metadatas, i),
                document=_at(documents, i),
                embedding=_at(embeddings, i),
            )
        )
    return items


class CollectionService:
    """
    Stateless proxy over a ChromaDB endpoint.
    Every call opens a fresh client through `connect`; nothing is cached.
    """

    def __init__(self, connect: Callable[[str], ChromaProvider] | None = None) -> None:
        self.connect = connect or ChromaProvider

    def list_collections(self, url: str) -> List[str]:
        try:
            provider = self.connect(url)
            return normalize_collection_names(provider.list_collections())
        except Exception as e:
            logger.error(f"ChromaDB client error while listing collections at {url}: {e}")
            raise ChromaConnectionError.from_exception(e)

    def fetch_items(self, url: str, collection_name: str) -> List[Item]:
        try:
            provider = self.connect(url)
            result = provider.get_collection_contents(collection_name)
            return assemble_items(result)
        except Exception as e:
            logger.error(f"ChromaDB client error while fetching '{collection_name}' from {url}: {e}")
            raise ChromaConnectionError.from_exception(e)
