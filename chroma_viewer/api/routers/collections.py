from __future__ import annotations
from typing import Any, Dict, List
from fastapi import APIRouter
from fastapi import status as http

from chroma_viewer.core.errors import MissingFieldError
from chroma_viewer.services.collection_service import CollectionService

MISSING_URL = "ChromaDB URL is required"

router = APIRouter()
svc = CollectionService()


@router.post("", response_model=List[str], status_code=http.HTTP_200_OK)
def list_collections(body: Dict[str, Any]):
    """
    Request JSON: {"url": "http://localhost:8000"}
    Returns the collection names at that endpoint (possibly empty).
    """
    url = body.get("url")
    if not url or not str(url).strip():
        raise MissingFieldError(MISSING_URL)
    return svc.list_collections(str(url))
