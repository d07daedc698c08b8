from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional, Union
import numpy as np

# Scalar values ChromaDB allows in a metadata mapping.
MetadataValue = Union[str, int, float, bool, None]


class Item(BaseModel):
    """
    One record of a collection.
    - id: unique within the collection, never empty
    - document: stored text, if any
    - metadata: flat key -> scalar mapping, if any
    - embedding: the stored vector, if it was returned
    """
    id: str = Field(min_length=1)
    document: Optional[str] = None
    metadata: Optional[Dict[str, MetadataValue]] = None
    embedding: Optional[List[float]] = None

    @field_validator('embedding', mode='before')
    @classmethod
    def validate_embedding(cls, v: Any) -> Optional[List[float]]:
        """Chroma hands back numpy arrays; store plain floats."""
        if v is None:
            return None
        return np.asarray(v, dtype=float).ravel().tolist()


class CollectionRef(BaseModel):
    """Which remote collection is loaded: (endpoint url, collection name)."""
    endpoint_url: str
    collection_name: str

    model_config = {"frozen": True}
