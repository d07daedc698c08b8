"""
UI shell state for one viewer window.

The session owns navigation (url -> collections -> data), the loaded items
and the current ViewState. Only connect() and select_collection() touch
the network; every other interaction swaps in a new ViewState and the
page is recomputed from memory.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional, Sequence, Set
import logging

from chroma_viewer.adapters.viewer_backends import ViewerBackend
from chroma_viewer.concurrency.request_generation import RequestGeneration
from chroma_viewer.core.config import settings
from chroma_viewer.core.errors import ChromaViewerError
from chroma_viewer.models.item import CollectionRef, Item
from chroma_viewer.models.page import PageResult
from chroma_viewer.models.view_state import SortKey, ViewState
from chroma_viewer.presentation.pipeline import filter_items, run_pipeline
from chroma_viewer.presentation.pipeline import total_pages as count_pages

logger = logging.getLogger(__name__)


class Step(str, Enum):
    URL = "url"
    COLLECTIONS = "collections"
    DATA = "data"


class BrowserSession:
    def __init__(self, backend: ViewerBackend, page_size_options: Sequence[int] | None = None) -> None:
        self.backend = backend
        self.page_size_options = tuple(page_size_options or settings.PAGE_SIZE_OPTIONS)
        self.step = Step.URL
        self.url = ""
        self.collections: List[str] = []
        self.ref: Optional[CollectionRef] = None
        self.items: List[Item] = []
        self.view = ViewState()
        self.expanded: Set[str] = set()
        self.error = ""
        self.loading = False
        self._generation = RequestGeneration()

    # --------------- network actions ---------------
    async def connect(self, url: str) -> bool:
        """List the collections at `url` and move to the collections step."""
        self.error = ""
        url = (url or "").strip()
        if not url:
            self.error = "Please enter a ChromaDB URL"
            return False

        ticket = self._generation.issue()
        self.loading = True
        try:
            collections = await self.backend.list_collections(url)
        except ChromaViewerError as e:
            if self._generation.is_current(ticket):
                self.loading = False
                self.error = f"Failed to fetch collections: {e}. Please check the URL and ensure ChromaDB is running."
            return False

        if not self._generation.is_current(ticket):
            logger.debug(f"Discarding stale collection list for {url}")
            return False
        self.loading = False
        self.url = url
        self.collections = collections
        self._unload()
        self.step = Step.COLLECTIONS
        return True

    async def select_collection(self, collection_name: str) -> bool:
        """Load every item of the collection and start a fresh view over it."""
        self.error = ""
        if not self.url or not collection_name:
            return False

        ticket = self._generation.issue()
        self.loading = True
        try:
            items = await self.backend.fetch_items(self.url, collection_name)
        except ChromaViewerError as e:
            if self._generation.is_current(ticket):
                self.loading = False
                self.error = f"Failed to fetch collection data: {e}"
            return False

        if not self._generation.is_current(ticket):
            logger.debug(f"Discarding stale items for collection '{collection_name}'")
            return False
        self.loading = False
        self.ref = CollectionRef(endpoint_url=self.url, collection_name=collection_name)
        self.items = list(items)
        self.view = ViewState()
        self.expanded = set()
        self.step = Step.DATA
        return True

    # --------------- navigation ---------------
    def back(self) -> Step:
        self.error = ""
        # anything still in flight belongs to the screen we are leaving
        self._generation.invalidate()
        self.loading = False
        if self.step == Step.DATA:
            self._unload()
            self.step = Step.COLLECTIONS
        elif self.step == Step.COLLECTIONS:
            self.step = Step.URL
        return self.step

    def _unload(self) -> None:
        self.ref = None
        self.items = []
        self.view = ViewState()
        self.expanded = set()

    # --------------- view interactions ---------------
    def search(self, term: str) -> ViewState:
        self.error = ""
        self.view = self.view.with_search(term)
        return self.view

    def sort_by(self, key: SortKey) -> ViewState:
        self.error = ""
        self.view = self.view.toggle_sort(key)
        return self.view

    def set_page_size(self, page_size: int) -> ViewState:
        self.error = ""
        if page_size not in self.page_size_options:
            raise ValueError(f"page size must be one of {list(self.page_size_options)}")
        self.view = self.view.with_page_size(page_size)
        return self.view

    def total_pages(self) -> int:
        filtered = filter_items(self.items, self.view.search_term)
        return count_pages(len(filtered), self.view.page_size)

    def go_to_page(self, page_number: int) -> ViewState:
        self.error = ""
        clamped = min(max(int(page_number), 1), self.total_pages())
        self.view = self.view.with_page(clamped)
        return self.view

    def next_page(self) -> ViewState:
        return self.go_to_page(self.view.page_number + 1)

    def previous_page(self) -> ViewState:
        return self.go_to_page(self.view.page_number - 1)

    def toggle_embedding(self, item_id: str) -> bool:
        """Flip the expanded flag of one item's embedding; returns the new state."""
        if item_id in self.expanded:
            self.expanded.discard(item_id)
            return False
        self.expanded.add(item_id)
        return True

    def current_page(self) -> PageResult:
        return run_pipeline(self.items, self.view)
