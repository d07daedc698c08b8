#!/usr/bin/env python3
"""
Interactive terminal viewer for a ChromaDB endpoint.
Prereqs:
- ChromaDB reachable (default http://localhost:8000)
- Proxy API running: uvicorn chroma_viewer.main:app --port 8080
  (or set USE_LOCAL_BACKEND=true in .env to skip the API and talk to ChromaDB directly)
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from chroma_viewer.adapters.viewer_backends import HttpViewerBackend, LocalViewerBackend
from chroma_viewer.core.config import settings
from chroma_viewer.models.view_state import SortDirection, SortKey
from chroma_viewer.presentation.formatting import (
    format_embedding,
    format_metadata,
    page_window,
    range_label,
    truncate,
)
from chroma_viewer.session.browser_session import BrowserSession, Step


def prompt(msg: str, default: Optional[str] = None) -> str:
    suffix = f" [{default}]" if default is not None else ""
    val = input(f"{msg}{suffix}: ").strip()
    if not val and default is not None:
        return default
    return val


def _escape_single_quotes(s: str) -> str:
    # Safely embed JSON in single-quoted shell string: 'foo'\''bar'
    return s.replace("'", "'\"'\"'")


def curl_post(url: str, body: Dict[str, Any]) -> str:
    body_str = json.dumps(body, ensure_ascii=False)
    return f"curl -s -X POST {url} -H 'Content-Type: application/json' -d '{_escape_single_quotes(body_str)}' | jq ."


def choose_from_list(name: str, items: List[str]) -> Optional[str]:
    if not items:
        print(f"No {name} available.")
        return None
    print(f"Available {name}:")
    for i, v in enumerate(items, 1):
        print(f"  {i}. {v}")
    choice = prompt(f"Choose {name} by number (or blank to cancel)")
    if not choice:
        return None
    try:
        idx = int(choice)
        if 1 <= idx <= len(items):
            return items[idx - 1]
    except ValueError:
        pass
    print("Invalid choice.")
    return None


def _echo(session: BrowserSession, path: str, body: Dict[str, Any]) -> None:
    if isinstance(session.backend, HttpViewerBackend):
        print("\n$ " + curl_post(f"{session.backend.api_base}{path}", body))


def _sort_marker(session: BrowserSession, key: SortKey) -> str:
    if session.view.sort_key != key:
        return ""
    return " ▲" if session.view.sort_direction == SortDirection.ASC else " ▼"


def render_page(session: BrowserSession) -> None:
    result = session.current_page()
    ref = session.ref
    print(f"\n=== {ref.collection_name if ref else '?'} @ {session.url} ===")
    if session.view.search_term:
        print(f"Search: {session.view.search_term!r}")
    print(range_label(result))
    if not result.page:
        print("No items match." if session.items else "This collection is empty.")
    else:
        header = (
            f"{'#':>3}  {'ID' + _sort_marker(session, SortKey.ID):<24}  "
            f"{'Document' + _sort_marker(session, SortKey.DOCUMENT):<40}  "
            f"{'Metadata' + _sort_marker(session, SortKey.METADATA):<30}  Embedding"
        )
        print(header)
        print("-" * len(header))
        for row, item in enumerate(result.page, 1):
            meta = json.dumps(item.metadata, ensure_ascii=False) if item.metadata else None
            dims = f"{len(item.embedding)} dims" if item.embedding is not None else "null"
            print(
                f"{row:>3}  {truncate(item.id, 24):<24}  {truncate(item.document, 40):<40}  "
                f"{truncate(meta, 30):<30}  {dims}"
            )
            if item.id in session.expanded:
                print(f"     embedding: {format_embedding(item.embedding)}")
    pages = " ".join(
        "…" if p is None else (f"[{p}]" if p == result.page_number else str(p))
        for p in page_window(result.page_number, result.total_pages)
    )
    print(f"\nPages: {pages}   (page size {result.page_size})")


def _pick_row(session: BrowserSession) -> Optional[Any]:
    page = session.current_page().page
    if not page:
        print("Nothing on this page.")
        return None
    choice = prompt("Row #")
    try:
        idx = int(choice)
    except ValueError:
        print("Invalid row.")
        return None
    if not 1 <= idx <= len(page):
        print("Invalid row.")
        return None
    return page[idx - 1]


def data_menu() -> None:
    print("\ns) Search   o) Sort   z) Page size   n) Next   p) Previous   g) Go to page")
    print("e) Toggle embedding   m) Show metadata   b) Back to collections   q) Quit")


async def handle_url_step(session: BrowserSession) -> bool:
    url = prompt("ChromaDB URL (q to quit)", session.url or settings.DEFAULT_CHROMA_URL)
    if url.lower() == "q":
        return False
    _echo(session, "/collections", {"url": url})
    await session.connect(url)
    return True


async def handle_collections_step(session: BrowserSession) -> bool:
    print(f"\n=== Collections at {session.url} ===")
    if not session.collections:
        print("No Collections Found. This ChromaDB instance doesn't have any collections yet.")
        choice = prompt("b) Back, q) Quit", "b").lower()
        if choice == "q":
            return False
        session.back()
        return True
    name = choose_from_list("collections", session.collections)
    if not name:
        choice = prompt("b) Back, q) Quit, or Enter to choose again", "").lower()
        if choice == "q":
            return False
        if choice == "b":
            session.back()
        return True
    _echo(session, "/collection-data", {"url": session.url, "collectionName": name})
    await session.select_collection(name)
    return True


def handle_data_step(session: BrowserSession) -> bool:
    render_page(session)
    data_menu()
    choice = input("Select: ").strip().lower()
    if choice == "q":
        return False
    elif choice == "s":
        session.search(prompt("Search by ID, document content, or metadata", session.view.search_term))
    elif choice == "o":
        key = prompt("Sort by (id|document|metadata|none)", "id").strip().lower()
        try:
            session.sort_by(SortKey(key))
        except ValueError:
            print("Unknown sort key.")
    elif choice == "z":
        size = prompt(f"Items per page {list(session.page_size_options)}", str(session.view.page_size))
        try:
            session.set_page_size(int(size))
        except ValueError as e:
            print(f"✗ {e}")
    elif choice == "n":
        session.next_page()
    elif choice == "p":
        session.previous_page()
    elif choice == "g":
        try:
            session.go_to_page(int(prompt("Page", str(session.view.page_number))))
        except ValueError:
            print("Invalid page number.")
    elif choice == "e":
        item = _pick_row(session)
        if item is not None:
            session.toggle_embedding(item.id)
    elif choice == "m":
        item = _pick_row(session)
        if item is not None:
            print(f"\nMetadata for {item.id}:")
            print(format_metadata(item.metadata))
    elif choice == "b":
        session.back()
    else:
        print("Invalid choice.")
    return True


async def run(session: BrowserSession) -> None:
    keep_going = True
    while keep_going:
        try:
            if session.step == Step.URL:
                keep_going = await handle_url_step(session)
            elif session.step == Step.COLLECTIONS:
                keep_going = await handle_collections_step(session)
            else:
                keep_going = handle_data_step(session)
            if session.error:
                print(f"\n✗ {session.error}\n")
        except KeyboardInterrupt:
            print("\nInterrupted. Type 'q' to quit.")


def build_backend():
    if settings.USE_LOCAL_BACKEND:
        return LocalViewerBackend()
    return HttpViewerBackend(settings.VIEWER_API_BASE)


async def _main() -> None:
    backend = build_backend()
    session = BrowserSession(backend)
    try:
        await run(session)
    finally:
        await backend.close()


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        asyncio.run(_main())
    except (KeyboardInterrupt, EOFError):
        print("\nBye.")
        sys.exit(0)
    print("Bye.")


if __name__ == "__main__":
    main()
