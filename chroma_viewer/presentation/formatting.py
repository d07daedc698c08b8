"""
Display helpers for a page of items.
Not part of the pipeline; these only turn values into text.
"""

from __future__ import annotations
from typing import Any, List, Optional, Sequence
import json
import math

from chroma_viewer.core.config import settings
from chroma_viewer.models.page import PageResult


def format_number(x: float) -> str:
    """Print a float the way a browser would: 1 not 1.0, 0.25 stays 0.25."""
    if math.isfinite(x) and x == int(x) and abs(x) < 1e21:
        return str(int(x))
    return repr(float(x))


def format_embedding(embedding: Optional[Sequence[float]], preview: int | None = None) -> str:
    """
    Expanded embedding text. Vectors longer than the preview length show
    their first components, an ellipsis and the dimensionality.
    """
    if embedding is None:
        return "null"
    preview = preview or settings.EMBEDDING_PREVIEW_LENGTH
    values = list(embedding)
    if len(values) <= preview:
        return "[" + ", ".join(format_number(v) for v in values) + "]"
    head = ", ".join(format_number(v) for v in values[:preview])
    return f"[{head}, ...] ({len(values)} dimensions)"


def format_metadata(metadata: Any) -> str:
    if not metadata:
        return "null"
    if not isinstance(metadata, (dict, list)):
        return str(metadata)
    return json.dumps(metadata, indent=2, ensure_ascii=False)


def truncate(text: Optional[str], width: int = 40) -> str:
    """Single-line cell text."""
    if text is None:
        return "null"
    flat = " ".join(str(text).split())
    if len(flat) > width:
        return flat[:width - 1] + "…"
    return flat


def page_window(current: int, total: int) -> List[Optional[int]]:
    """
    Page buttons to draw: the current page with one neighbour on each side,
    anchored by the first and last pages. None marks an ellipsis gap.
    """
    if total <= 1:
        return [1]
    current = min(max(current, 1), total)
    lo = max(1, current - 1)
    hi = min(total, current + 1)

    pages: List[Optional[int]] = []
    if lo > 1:
        pages.append(1)
        if lo > 2:
            pages.append(None)
    pages.extend(range(lo, hi + 1))
    if hi < total:
        if hi < total - 1:
            pages.append(None)
        pages.append(total)
    return pages


def range_label(result: PageResult) -> str:
    if result.total_filtered == 0 or not result.page:
        return f"Showing 0 of {result.total_filtered} items"
    return f"Showing {result.first_index} to {result.last_index} of {result.total_filtered} items"
