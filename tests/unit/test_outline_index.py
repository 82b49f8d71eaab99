"""Tests for page lookups over an outline."""

import pytest

from interleave.config import SortOrder
from interleave.core.outline.index import OutlineIndex, parse_page
from interleave.core.outline.org import OrgOutline
from tests.unit.samples import heading_titled, page_notes


@pytest.mark.parametrize(
    ("value", "expected"),
    [("3", 3), (" 7 ", 7), ("0", None), ("-2", None), ("abc", None), ("", None), (None, None)],
)
def test_parse_page(value: str | None, expected: int | None) -> None:
    assert parse_page(value) == expected


def test_find_page_section_single_document(single_outline: OrgOutline) -> None:
    index = OutlineIndex(single_outline)
    assert index.find_page_section(3) is heading_titled(single_outline, "Notes for page 3")
    assert index.find_page_section(4) is None


def test_find_page_section_first_match_wins() -> None:
    outline = OrgOutline.parse(page_notes(2, 7, 2))
    found = OutlineIndex(outline).find_page_section(2)
    assert found is outline.headings[0]


def test_find_page_section_ignores_narrowing(single_outline: OrgOutline) -> None:
    single_outline.narrow_to(heading_titled(single_outline, "Notes for page 1"))
    found = OutlineIndex(single_outline).find_page_section(5)
    assert found is heading_titled(single_outline, "Notes for page 5")


def test_find_page_section_stays_inside_document_root(multi_outline: OrgOutline) -> None:
    """Both roots have a page-1 note; each scope only sees its own."""
    paper_a = heading_titled(multi_outline, "Paper A")
    paper_b = heading_titled(multi_outline, "Paper B")

    found_a = OutlineIndex(multi_outline, document_path="a.pdf").find_page_section(1)
    found_b = OutlineIndex(multi_outline, document_path="b.pdf").find_page_section(1)

    assert found_a is heading_titled(multi_outline, "A page 1")
    assert found_a not in multi_outline.subtree(paper_b)
    assert found_b is heading_titled(multi_outline, "B page 1")
    assert found_b not in multi_outline.subtree(paper_a)


def test_find_page_section_unknown_document(multi_outline: OrgOutline) -> None:
    assert OutlineIndex(multi_outline, document_path="c.pdf").find_page_section(1) is None


def test_find_document_root_ascends_from_point_then_scans(multi_outline: OrgOutline) -> None:
    index = OutlineIndex(multi_outline)
    multi_outline.goto(heading_titled(multi_outline, "B page 1"))

    assert index.find_document_root("b.pdf") is heading_titled(multi_outline, "Paper B")
    assert index.find_document_root("a.pdf") is heading_titled(multi_outline, "Paper A")
    assert index.find_document_root("c.pdf") is None


def test_enclosing_page_section_searches_ancestors(single_outline: OrgOutline) -> None:
    index = OutlineIndex(single_outline)
    detail = heading_titled(single_outline, "Detail")
    page1 = heading_titled(single_outline, "Notes for page 1")
    assert index.enclosing_page_section(detail) is page1
    assert index.enclosing_page_section(None) is None


def test_insertion_anchor_single_document_is_end_of_file() -> None:
    outline = OrgOutline.parse("* A\n** A1\n*** A2\n")
    anchor = OutlineIndex(outline).find_insertion_anchor()
    assert anchor.index == 3
    assert anchor.level == 3


def test_insertion_anchor_empty_document() -> None:
    anchor = OutlineIndex(OrgOutline()).find_insertion_anchor()
    assert (anchor.index, anchor.level) == (0, 1)


def test_insertion_anchor_multi_document_is_end_of_root(multi_outline: OrgOutline) -> None:
    anchor = OutlineIndex(multi_outline, document_path="a.pdf").find_insertion_anchor()
    assert anchor.index == 3
    assert anchor.level == 1


def test_has_any_sections() -> None:
    assert OutlineIndex(OrgOutline()).has_any_sections() is False
    assert OutlineIndex(OrgOutline.parse("* A\n")).has_any_sections() is True

    bare_root = OrgOutline.parse("* Paper\n:PROPERTIES:\n:INTERLEAVE_PDF: p.pdf\n:END:\n")
    assert OutlineIndex(bare_root, document_path="p.pdf").has_any_sections() is False


def _pages(index: OutlineIndex, outline: OrgOutline) -> list[int | None]:
    return [index.page_of(h) for h in outline.children(None)]


def test_sort_ascending_puts_missing_pages_first() -> None:
    outline = OrgOutline.parse(page_notes(5, None, 3))
    index = OutlineIndex(outline)
    index.sort_by_page(SortOrder.ASCENDING)
    assert _pages(index, outline) == [None, 3, 5]


def test_sort_descending_puts_missing_pages_last() -> None:
    outline = OrgOutline.parse(page_notes(5, None, 3, 9))
    index = OutlineIndex(outline)
    index.sort_by_page(SortOrder.DESCENDING)
    assert _pages(index, outline) == [9, 5, 3, None]


def test_sort_treats_malformed_pages_as_missing() -> None:
    text = page_notes(4, 1).replace("interleave_page_note: 4", "interleave_page_note: four")
    outline = OrgOutline.parse(text)
    index = OutlineIndex(outline)
    index.sort_by_page(SortOrder.DESCENDING)
    assert [h.title for h in outline.headings] == ["Section 1", "Section 0"]


def test_sort_with_nothing_to_sort_is_silent() -> None:
    OutlineIndex(OrgOutline()).sort_by_page(SortOrder.ASCENDING)
    bare_root = OrgOutline.parse("* Paper\n:PROPERTIES:\n:INTERLEAVE_PDF: p.pdf\n:END:\n")
    OutlineIndex(bare_root, document_path="p.pdf").sort_by_page(SortOrder.ASCENDING)


def test_sort_multi_document_only_touches_active_root() -> None:
    text = (
        "* Paper A\n:PROPERTIES:\n:INTERLEAVE_PDF: a.pdf\n:END:\n"
        "** a3\n:PROPERTIES:\n:interleave_page_note: 3\n:END:\n"
        "** a1\n:PROPERTIES:\n:interleave_page_note: 1\n:END:\n"
        "* Paper B\n:PROPERTIES:\n:INTERLEAVE_PDF: b.pdf\n:END:\n"
        "** b9\n:PROPERTIES:\n:interleave_page_note: 9\n:END:\n"
        "** b2\n:PROPERTIES:\n:interleave_page_note: 2\n:END:\n"
    )
    outline = OrgOutline.parse(text)
    OutlineIndex(outline, document_path="a.pdf").sort_by_page(SortOrder.ASCENDING)
    assert [h.title for h in outline.headings] == ["Paper A", "a1", "a3", "Paper B", "b9", "b2"]


@pytest.mark.parametrize(
    "text",
    [
        "* N\n:PROPERTIES:\n:INTERLEAVE_PAGE_NOTE: 4\n:END:\n",
        "* N\nSCHEDULED: <2024-05-01 Wed>\n:PROPERTIES:\n:interleave_page_note: 4\n:END:\n",
    ],
)
def test_find_page_section_in_editor_written_files(text: str) -> None:
    outline = OrgOutline.parse(text)
    assert OutlineIndex(outline).find_page_section(4) is outline.headings[0]


def test_document_root_property_is_case_insensitive() -> None:
    outline = OrgOutline.parse(
        "* Paper\n:PROPERTIES:\n:interleave_pdf: p.pdf\n:END:\n"
        "** N\n:PROPERTIES:\n:interleave_page_note: 2\n:END:\n"
    )
    index = OutlineIndex(outline, document_path="p.pdf")
    assert index.active_root() is outline.headings[0]
    assert index.find_page_section(2) is outline.headings[1]
