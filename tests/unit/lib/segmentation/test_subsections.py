"""Tests for subsection building."""

import pytest

from specstruct.lib.segmentation.parts import build_parts
from specstruct.lib.segmentation.records import Part
from specstruct.lib.segmentation.sections import build_sections
from specstruct.lib.segmentation.subsections import (
    BOUNDARY_POLICY,
    build_subsections,
    find_marks,
    split_subsections,
    truncate_code,
)


def _part(text: str, part_no: int = 2, explicit: bool = True) -> Part:
    return Part(
        section_id="26 24 13",
        part_no=part_no,
        title="PRODUCTS",
        start_page=4,
        end_page=4,
        text=text,
        explicit=explicit,
    )


@pytest.mark.unit
class TestFindMarks:
    """Tests for find_marks() and truncate_code()."""

    @pytest.mark.parametrize(
        "line,code,title",
        [
            ("2.1 MANUFACTURERS", "2.1", "MANUFACTURERS"),
            ("2.1.3 Ratings", "2.1.3", "Ratings"),
            ("2.1.3.1 - Short circuit", "2.1.3.1", "Short circuit"),
            ("2.1.3. : Rated current", "2.1.3", "Rated current"),
            ("2.4", "2.4", ""),
        ],
    )
    def test_mark_lines(self, line: str, code: str, title: str) -> None:
        """Test code extraction and title cleaning."""
        marks = find_marks([line])
        assert len(marks) == 1
        assert marks[0].code == code
        assert marks[0].title == title

    def test_lettered_lines_are_not_marks(self) -> None:
        """Test that list items are body text."""
        assert find_marks(["A. Comply with IEC 61439-2.", "text 2.1"]) == []

    def test_truncate_code(self) -> None:
        """Test code truncation to a level."""
        assert truncate_code("2.1.3.4", 3) == "2.1.3"
        assert truncate_code("2.1.3.4", 2) == "2.1"
        assert truncate_code("2.1", 3) == "2.1"


@pytest.mark.unit
class TestSplitSubsections:
    """Tests for split_subsections()."""

    def test_policy_order(self) -> None:
        """Test level-3 boundaries preferred over all marks."""
        assert BOUNDARY_POLICY.order == ["level-3", "all-marks"]

    def test_level3_boundaries(self) -> None:
        """Test subsections cut at level-3 marks with level-2 titles looked up."""
        part = _part(
            "2.1 MANUFACTURERS\n2.1.1 Approved\nA. ABB.\n"
            "2.2 SWITCHBOARDS\n2.2.1 Ratings\nA. 4000 A."
        )
        subsections = split_subsections(part, "SWITCHBOARDS")

        assert [s.level3_code for s in subsections] == ["2.1.1", "2.2.1"]
        first, second = subsections
        assert first.level2_code == "2.1"
        assert first.level2_title == "MANUFACTURERS"
        assert first.level3_title == "Approved"
        assert first.title == "SWITCHBOARDS"
        assert second.level2_title == "SWITCHBOARDS"
        assert second.text == "A. 4000 A."

    def test_level4_nested_in_owner(self) -> None:
        """Test that level-4 marks never become their own subsection."""
        part = _part(
            "2.1.3 Ratings\nintro\n2.1.3.1 Current\nA. 4000 A.\n"
            "2.1.3.2 Voltage\nA. 400 V.\n2.1.4 Finishes\nA. Grey."
        )
        subsections = split_subsections(part)

        assert [s.level3_code for s in subsections] == ["2.1.3", "2.1.4"]
        assert subsections[0].text == (
            "intro\n2.1.3.1 Current\nA. 4000 A.\n2.1.3.2 Voltage\nA. 400 V."
        )

    def test_all_marks_fallback(self) -> None:
        """Test shallow parts cut at every mark."""
        part = _part("1.1 Summary\nA. Scope.\n1.2 Related\nB. Other.", part_no=1)
        subsections = split_subsections(part)

        assert [(s.level2_code, s.level3_code) for s in subsections] == [
            ("1.1", "1.1"),
            ("1.2", "1.2"),
        ]
        assert subsections[0].text == "A. Scope."
        assert subsections[0].level3_title == "Summary"

    def test_no_marks_pass_through(self) -> None:
        """Test a part without numbered marks becoming one subsection."""
        part = _part("A. Free text.\nB. More text.")
        subsections = split_subsections(part, "Title")

        assert len(subsections) == 1
        only = subsections[0]
        assert only.level2_code is None
        assert only.level3_code is None
        assert only.text == part.text
        assert (only.start_page, only.end_page) == (4, 4)

    def test_empty_part(self) -> None:
        """Test that a blank part yields nothing."""
        assert split_subsections(_part("  \n")) == []

    def test_duplicate_level3_merged(self) -> None:
        """Test that a repeated level-3 code stays a single subsection."""
        part = _part("2.1.1 Approved\nA. ABB.\n2.1.2 Other\nx\n2.1.1 Approved\nB. GE.")
        subsections = split_subsections(part)

        assert [s.level3_code for s in subsections] == ["2.1.1", "2.1.2"]
        assert subsections[0].text == "A. ABB.\nB. GE."

    def test_page_ranges(self, spec_pages: list[str]) -> None:
        """Test subsection pages taken from the part line map."""
        sections = build_sections(spec_pages)
        parts = build_parts(sections)
        subsections = build_subsections(sections, parts)
        owned = [s for s in subsections if s.section_id == "26 24 13"]
        assert {(s.start_page, s.end_page) for s in owned} == {(2, 2)}


@pytest.mark.unit
class TestBuildSubsections:
    """Tests for build_subsections()."""

    def test_part_one_excluded_with_explicit_parts(self, spec_pages: list[str]) -> None:
        """Test that boilerplate Part 1 is not subdivided."""
        sections = build_sections(spec_pages)
        subsections = build_subsections(sections, build_parts(sections))

        assert all(s.part_no != 1 for s in subsections)
        assert [(s.section_id, s.level3_code) for s in subsections] == [
            ("26 24 13", "2.1.1"),
            ("26 24 13", "2.2.1"),
            ("26 24 13", "3.1.1"),
            ("26 05 19", "2.1.1"),
        ]
        assert subsections[0].title == "SWITCHBOARDS"

    def test_part_one_kept_when_requested(self, spec_pages: list[str]) -> None:
        """Test disabling the boilerplate exclusion."""
        sections = build_sections(spec_pages)
        subsections = build_subsections(
            sections, build_parts(sections), exclude_boilerplate_part=False
        )
        assert any(s.part_no == 1 for s in subsections)

    def test_plain_document_keeps_part_one(self) -> None:
        """Test that documents without PART markers keep their only part."""
        sections = build_sections(["1. General\n1.1.1 Scope\nA. Text."])
        subsections = build_subsections(sections, build_parts(sections))

        assert len(subsections) == 1
        assert subsections[0].part_no == 1
        assert subsections[0].level3_code == "1.1.1"
