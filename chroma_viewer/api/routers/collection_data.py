from __future__ import annotations
from typing import Any, Dict, List
from fastapi import APIRouter
from fastapi import status as http

from chroma_viewer.core.errors import MissingFieldError
from chroma_viewer.models.item import Item
from chroma_viewer.services.collection_service import CollectionService

MISSING_FIELDS = "ChromaDB URL and collection name are required"

router = APIRouter()
svc = CollectionService()


@router.post("", response_model=List[Item], status_code=http.HTTP_200_OK)
def get_collection_data(body: Dict[str, Any]):
    """
    Request JSON: {"url": "http://localhost:8000", "collectionName": "docs"}
    Returns every item of the collection as {id, metadata, document, embedding};
    an empty collection gives [].
    """
    url = body.get("url")
    collection_name = body.get("collectionName")
    if not url or not collection_name:
        raise MissingFieldError(MISSING_FIELDS)
    return svc.fetch_items(str(url), str(collection_name))
