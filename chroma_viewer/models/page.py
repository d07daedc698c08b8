from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List

from .item import Item


class PageResult(BaseModel):
    """
    Output of the presentation pipeline: the visible slice plus the counts
    the pagination controls need.
    """
    page: List[Item] = Field(default_factory=list)
    total_filtered: int = 0
    total_pages: int = 1
    page_number: int = 1
    page_size: int = 10

    @property
    def first_index(self) -> int:
        """1-based position of the first visible item (0 when the page is empty)."""
        if not self.page:
            return 0
        return (self.page_number - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.page:
            return 0
        return self.first_index + len(self.page) - 1
