"""
Search -> sort -> paginate over a collection that is already in memory.
Pure functions: the input list is never mutated and nothing here raises
for a valid ViewState.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Sequence, Tuple
import json
import math

from pyuca import Collator

from chroma_viewer.models.item import Item
from chroma_viewer.models.page import PageResult
from chroma_viewer.models.view_state import SortDirection, SortKey, ViewState


def _json(value: Any) -> str:
    # Compact, insertion-ordered; same text a browser's JSON.stringify gives.
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def matches(item: Item, term: str) -> bool:
    """`term` must already be lowercased."""
    if item.id and term in item.id.lower():
        return True
    if isinstance(item.document, str) and term in item.document.lower():
        return True
    if item.metadata:
        for key, value in item.metadata.items():
            if term in key.lower():
                return True
            # numbers and booleans are never substring-matched
            if isinstance(value, str) and term in value.lower():
                return True
    return False


def filter_items(items: Sequence[Item], search_term: str) -> List[Item]:
    if not search_term.strip():
        return list(items)
    term = search_term.lower()
    return [item for item in items if matches(item, term)]


def _id_key(item: Item) -> str:
    return item.id or ""


def _document_key(item: Item) -> str:
    if isinstance(item.document, str):
        return item.document
    return _json(item.document if item.document is not None else "")


def _metadata_key(item: Item) -> str:
    return _json(item.metadata if item.metadata is not None else {})


SORT_KEYS: Dict[SortKey, Callable[[Item], str]] = {
    SortKey.ID: _id_key,
    SortKey.DOCUMENT: _document_key,
    SortKey.METADATA: _metadata_key,
}


# Unicode Collation Algorithm, root order: case-insensitive at the primary level
_collator = Collator()


def _collation_key(text: str) -> Tuple[int, ...]:
    return _collator.sort_key(text)


def sort_items(items: Sequence[Item], sort_key: SortKey, direction: SortDirection) -> List[Item]:
    """
    Stable sort by the derived sort string, collated with the Unicode
    Collation Algorithm (so "apple" < "Banana" < "cherry"). Ties keep their incoming order in both directions.
    """
    derive = SORT_KEYS.get(SortKey(sort_key))
    if derive is None:
        return list(items)
    return sorted(
        items,
        key=lambda item: _collation_key(derive(item)),
        reverse=SortDirection(direction) == SortDirection.DESC,
    )


def total_pages(total_filtered: int, page_size: int) -> int:
    return max(1, math.ceil(total_filtered / page_size))


def paginate(items: Sequence[Item], page_size: int, page_number: int) -> List[Item]:
    # Out-of-range pages come back empty; clamping is the caller's job.
    start = (page_number - 1) * page_size
    return list(items[start:start + page_size])


def run_pipeline(items: Sequence[Item], view: ViewState) -> PageResult:
    filtered = filter_items(items, view.search_term)
    ordered = sort_items(filtered, view.sort_key, view.sort_direction)
    return PageResult(
        page=paginate(ordered, view.page_size, view.page_number),
        total_filtered=len(filtered),
        total_pages=total_pages(len(filtered), view.page_size),
        page_number=view.page_number,
        page_size=view.page_size,
    )
