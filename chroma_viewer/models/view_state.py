"""
Client-held search/sort/pagination parameters.
A ViewState is never changed in place: every interaction builds a new one.
"""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field

from chroma_viewer.core.config import settings


class SortKey(str, Enum):
    NONE = "none"
    ID = "id"
    DOCUMENT = "document"
    METADATA = "metadata"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ViewState(BaseModel):
    search_term: str = ""
    sort_key: SortKey = SortKey.NONE
    sort_direction: SortDirection = SortDirection.ASC
    page_size: int = Field(default=settings.DEFAULT_PAGE_SIZE, gt=0)
    page_number: int = Field(default=1, ge=1)

    model_config = {"frozen": True}

    def _replace(self, **changes) -> "ViewState":
        # Rebuild through the constructor so field constraints are re-checked.
        return ViewState(**{**self.model_dump(), **changes})

    def with_search(self, term: str) -> "ViewState":
        # A new term always starts from the first page.
        return self._replace(search_term=term, page_number=1)

    def toggle_sort(self, key: SortKey) -> "ViewState":
        """
        Column-header click: the active key flips direction,
        any other key becomes active in ascending order.
        """
        key = SortKey(key)
        if key == self.sort_key and key != SortKey.NONE:
            flipped = SortDirection.DESC if self.sort_direction == SortDirection.ASC else SortDirection.ASC
            return self._replace(sort_direction=flipped)
        return self._replace(sort_key=key, sort_direction=SortDirection.ASC)

    def with_page_size(self, page_size: int) -> "ViewState":
        return self._replace(page_size=page_size, page_number=1)

    def with_page(self, page_number: int) -> "ViewState":
        return self._replace(page_number=page_number)
