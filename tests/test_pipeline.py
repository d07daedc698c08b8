"""
Tests for the in-memory search -> sort -> paginate pipeline.
No network involved: items are built directly.
"""
from chroma_viewer.models.item import Item
from chroma_viewer.models.view_state import SortDirection, SortKey, ViewState
from chroma_viewer.presentation.pipeline import (
    filter_items,
    paginate,
    run_pipeline,
    sort_items,
    total_pages,
)


def ids(items):
    return [i.id for i in items]


SAMPLE = [
    Item(id="doc-1", document="The quick brown fox", metadata={"source": "Wiki", "page": 3}),
    Item(id="doc-2", document="Lazy dogs sleep", metadata={"author": "Ann", "draft": True}),
    Item(id="note-3", document=None, metadata=None),
    Item(id="note-4", document="Foxes are clever", metadata={"topic": None}),
]


class TestFilter:
    """Search term matching."""

    def test_scenario_a_document_match(self):
        """Only the item whose document contains the term passes."""
        items = [Item(id="a", document="cat"), Item(id="b", document="dog")]
        assert ids(filter_items(items, "cat")) == ["a"]

    def test_empty_term_returns_everything_in_order(self):
        """An empty term keeps every item and their order."""
        assert ids(filter_items(SAMPLE, "")) == ids(SAMPLE)

    def test_whitespace_term_returns_everything(self):
        """A whitespace-only term counts as empty."""
        assert ids(filter_items(SAMPLE, "   ")) == ids(SAMPLE)

    def test_case_insensitive(self):
        """Matching lowercases both sides."""
        assert ids(filter_items(SAMPLE, "FOX")) == ["doc-1", "note-4"]

    def test_matches_id(self):
        """The id is searched."""
        assert ids(filter_items(SAMPLE, "note")) == ["note-3", "note-4"]

    def test_matches_metadata_key(self):
        """Metadata key names are searched."""
        assert ids(filter_items(SAMPLE, "autho")) == ["doc-2"]

    def test_matches_metadata_string_value(self):
        """String metadata values are searched."""
        assert ids(filter_items(SAMPLE, "wiki")) == ["doc-1"]

    def test_numbers_and_booleans_not_matched(self):
        """Non-textual metadata values never match."""
        assert filter_items(SAMPLE, "3") == [SAMPLE[2]]  # only via id "note-3"
        assert filter_items(SAMPLE, "true") == []

    def test_term_not_trimmed(self):
        """Leading spaces in a non-blank term are part of the term."""
        assert ids(filter_items(SAMPLE, " brown")) == ["doc-1"]

    def test_does_not_mutate_input(self):
        """The input list is left as it was."""
        items = list(SAMPLE)
        filter_items(items, "fox")
        assert items == SAMPLE

    def test_filter_correctness(self):
        """Every kept item matches; every dropped item does not."""
        term = "o"
        kept = filter_items(SAMPLE, term)
        for item in SAMPLE:
            textual = [item.id]
            if isinstance(item.document, str):
                textual.append(item.document)
            for k, v in (item.metadata or {}).items():
                textual.append(k)
                if isinstance(v, str):
                    textual.append(v)
            expected = any(term in t.lower() for t in textual)
            assert (item in kept) == expected


class TestSort:
    """Sorting by derived sort strings."""

    def test_scenario_c_id_descending(self):
        """ids b, a, c sorted descending give c, b, a."""
        items = [Item(id="b"), Item(id="a"), Item(id="c")]
        assert ids(sort_items(items, SortKey.ID, SortDirection.DESC)) == ["c", "b", "a"]

    def test_none_keeps_order(self):
        """Sort key 'none' leaves the filter order alone."""
        assert ids(sort_items(SAMPLE, SortKey.NONE, SortDirection.DESC)) == ids(SAMPLE)

    def test_document_sort_puts_absent_first(self):
        """An absent document sorts as the JSON text of an empty string."""
        items = [Item(id="x", document="beta"), Item(id="y"), Item(id="z", document="alpha")]
        assert ids(sort_items(items, SortKey.DOCUMENT, SortDirection.ASC)) == ["y", "z", "x"]

    def test_metadata_sort_uses_json_text(self):
        """Metadata is compared by its compact JSON text; absent is {}."""
        items = [
            Item(id="1", metadata={"k": "b"}),
            Item(id="2", metadata=None),
            Item(id="3", metadata={"k": "a"}),
        ]
        assert ids(sort_items(items, SortKey.METADATA, SortDirection.ASC)) == ["3", "1", "2"]

    def test_stable_for_ties_both_directions(self):
        """Equal sort strings keep their incoming order ascending and descending."""
        items = [Item(id="z", document="same"), Item(id="a", document="same"), Item(id="m", document="same")]
        assert ids(sort_items(items, SortKey.DOCUMENT, SortDirection.ASC)) == ["z", "a", "m"]
        assert ids(sort_items(items, SortKey.DOCUMENT, SortDirection.DESC)) == ["z", "a", "m"]

    def test_descending_is_reverse_of_ascending_without_ties(self):
        """With distinct keys, descending is ascending reversed."""
        items = [Item(id=f"id-{n}") for n in (7, 3, 9, 1, 5)]
        asc = sort_items(items, SortKey.ID, SortDirection.ASC)
        desc = sort_items(items, SortKey.ID, SortDirection.DESC)
        assert ids(desc) == list(reversed(ids(asc)))

    def test_mixed_case_sorts_alphabetically(self):
        """Case does not split the alphabet: apple < Banana < cherry."""
        items = [Item(id="cherry"), Item(id="Banana"), Item(id="apple")]
        assert ids(sort_items(items, SortKey.ID, SortDirection.ASC)) == ["apple", "Banana", "cherry"]
        assert ids(sort_items(items, SortKey.ID, SortDirection.DESC)) == ["cherry", "Banana", "apple"]

    def test_mixed_case_documents(self):
        """Documents collate the same way as ids."""
        items = [Item(id="1", document="zebra"), Item(id="2", document="Apple"), Item(id="3", document="mango")]
        assert ids(sort_items(items, SortKey.DOCUMENT, SortDirection.ASC)) == ["2", "3", "1"]

    def test_accepts_plain_strings(self):
        """Raw 'id'/'desc' values work as well as the enums."""
        items = [Item(id="a"), Item(id="b")]
        assert ids(sort_items(items, "id", "desc")) == ["b", "a"]


class TestPaginate:
    """Page slicing and page counts."""

    def test_total_pages_minimum_one(self):
        """Zero items still report one page."""
        assert total_pages(0, 10) == 1

    def test_total_pages_rounds_up(self):
        """A partial last page counts."""
        assert total_pages(25, 10) == 3
        assert total_pages(30, 10) == 3

    def test_page_beyond_range_is_empty(self):
        """Asking past the last page gives nothing instead of failing."""
        items = [Item(id=str(n)) for n in range(5)]
        assert paginate(items, 10, 4) == []

    def test_pages_cover_everything_once(self):
        """Concatenating every page reproduces the sequence without gaps or overlaps."""
        items = [Item(id=f"item-{n:02d}") for n in range(23)]
        pages = total_pages(len(items), 5)
        joined = []
        for p in range(1, pages + 1):
            joined.extend(paginate(items, 5, p))
        assert ids(joined) == ids(items)


class TestRunPipeline:
    """The three stages together."""

    def test_scenario_b_third_page(self):
        """25 items, 10 per page, page 3 holds the last five."""
        items = [Item(id=f"item-{n:02d}") for n in range(25)]
        result = run_pipeline(items, ViewState(page_size=10, page_number=3))
        assert ids(result.page) == [f"item-{n}" for n in range(20, 25)]
        assert result.total_pages == 3
        assert result.total_filtered == 25

    def test_scenario_d_empty_collection(self):
        """An empty collection gives one empty page."""
        result = run_pipeline([], ViewState())
        assert result.total_filtered == 0
        assert result.total_pages == 1
        assert result.page == []

    def test_filter_then_sort_then_page(self):
        """Counts reflect the filtered set; the page is sorted."""
        view = ViewState(search_term="fox", sort_key=SortKey.ID, sort_direction=SortDirection.DESC, page_size=1)
        result = run_pipeline(SAMPLE, view)
        assert result.total_filtered == 2
        assert result.total_pages == 2
        assert ids(result.page) == ["note-4"]

    def test_deterministic(self):
        """Same inputs, same output."""
        view = ViewState(sort_key=SortKey.METADATA)
        assert run_pipeline(SAMPLE, view) == run_pipeline(SAMPLE, view)

    def test_range_indexes(self):
        """first_index/last_index describe the visible slice."""
        items = [Item(id=f"item-{n:02d}") for n in range(12)]
        result = run_pipeline(items, ViewState(page_size=5, page_number=3))
        assert (result.first_index, result.last_index) == (11, 12)
