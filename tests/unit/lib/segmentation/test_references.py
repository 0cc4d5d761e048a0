"""Tests for standard-reference mining and free-text standard-id scanning."""

import pytest

from specstruct.lib.segmentation.records import ReferenceRegistry
from specstruct.lib.segmentation.references import (
    ReferenceLineKind,
    find_standard_ids,
    match_reference_line,
    match_reference_lines,
    mine_references,
    normalize_reference_id,
    resolve_shared_titles,
    split_reference_lists,
)


def _span(*lines: str) -> str:
    return "\n".join(["1.3 REFERENCES", *lines, "1.4 SUBMITTALS"])


@pytest.mark.unit
class TestMatchReferenceLine:
    """Table-driven tests for single reference lines."""

    @pytest.mark.parametrize(
        "line,ref_id,title,kind",
        [
            (
                "IEC 60947-2   Low-voltage switchgear",
                "IEC 60947-2",
                "Low-voltage switchgear",
                ReferenceLineKind.CODE,
            ),
            (
                "IEC 61439-1: Low-voltage switchgear assemblies",
                "IEC 61439-1",
                "Low-voltage switchgear assemblies",
                ReferenceLineKind.CODE,
            ),
            ("IEC 60529:", "IEC 60529", None, ReferenceLineKind.CODE),
            ("IEC 60947-2 /", "IEC 60947-2", None, ReferenceLineKind.CONTINUATION),
            (
                "BS EN 60898-2   Circuit-breakers",
                "BS EN 60898-2",
                "Circuit-breakers",
                ReferenceLineKind.CODE,
            ),
            (
                "IEC/EN 62271-200 - High-voltage switchgear",
                "IEC/EN 62271-200",
                "High-voltage switchgear",
                ReferenceLineKind.CODE,
            ),
            ("IEC 60947 - 2", "IEC 60947-2", None, ReferenceLineKind.CODE),
            (
                "A. NFPA 70 National Electrical Code",
                "NFPA 70",
                "National Electrical Code",
                ReferenceLineKind.CODE,
            ),
            ("ASTM B3.", "ASTM B3", None, ReferenceLineKind.CODE),
        ],
    )
    def test_reference_lines(
        self, line: str, ref_id: str, title: str | None, kind: ReferenceLineKind
    ) -> None:
        """Test trailing colon, slash continuation and prefix shapes."""
        match = match_reference_line(line)
        assert match is not None
        assert match.ref_id == ref_id
        assert match.title == title
        assert match.kind is kind

    @pytest.mark.parametrize(
        "line",
        [
            "1.3 REFERENCES",
            "The following standards apply:",
            "A. Product data.",
            "IEC standards",
            "",
        ],
    )
    def test_non_reference_lines(self, line: str) -> None:
        """Test that malformed lines are skipped."""
        assert match_reference_line(line) is None

    def test_normalize_reference_id(self) -> None:
        """Test prefix/code spacing canonicalization."""
        assert normalize_reference_id("IEC / EN", "62271 - 200") == "IEC/EN 62271-200"
        assert normalize_reference_id("BS  EN", "60898-2") == "BS EN 60898-2"


@pytest.mark.unit
class TestResolveSharedTitles:
    """Tests for the shared-title idiom."""

    def test_continuation_takes_next_title(self) -> None:
        """Test a slash-continued code sharing the following title."""
        lines = ["IEC 60947-2 /", "BS EN 60898-2   Low Voltage Switchgear"]
        resolved = resolve_shared_titles(lines, match_reference_lines(lines))
        assert resolved == [
            ("IEC 60947-2", "Low Voltage Switchgear"),
            ("BS EN 60898-2", "Low Voltage Switchgear"),
        ]

    def test_chain_of_continuations(self) -> None:
        """Test several continuations sharing one title."""
        lines = ["IEC 1 /", "IEC 2 /", "", "IEC 3 Title"]
        resolved = resolve_shared_titles(lines, match_reference_lines(lines))
        assert [title for _, title in resolved] == ["Title", "Title", "Title"]

    def test_continuation_before_prose_keeps_own_title(self) -> None:
        """Test a continuation whose next line is not a reference line."""
        lines = ["IEC 60947-2 Switchgear /", "see drawings"]
        resolved = resolve_shared_titles(lines, match_reference_lines(lines))
        assert resolved == [("IEC 60947-2", "Switchgear")]

    @pytest.mark.parametrize(
        "line,expected",
        [
            (
                "IEC 61439-1 / IEC 61439-2 Switchgear assemblies",
                ["IEC 61439-1 /", "IEC 61439-2 Switchgear assemblies"],
            ),
            (
                "IEC 1 / BS EN 2 / IEC 3 Title",
                ["IEC 1 /", "BS EN 2 /", "IEC 3 Title"],
            ),
            ("IEC / EN 62271-200 Title", ["IEC / EN 62271-200 Title"]),
            ("IEC 60947-2 /", ["IEC 60947-2 /"]),
        ],
    )
    def test_split_reference_lists(self, line: str, expected: list[str]) -> None:
        """Test same-line code lists broken at slashes between codes."""
        assert split_reference_lists([line]) == expected


@pytest.mark.unit
class TestMineReferences:
    """Tests for mine_references()."""

    def test_shared_title_scenario(self) -> None:
        """Test two entries sharing the title of the second line."""
        text = _span("IEC 60947-2 /", "BS EN 60898-2   Low Voltage Switchgear")
        registry = mine_references("26 24 13", text)

        assert list(registry.references) == ["IEC 60947-2", "BS EN 60898-2"]
        assert all(
            ref.title == "Low Voltage Switchgear"
            for ref in registry.references.values()
        )
        assert [r.reference_id for r in registry.relations] == [
            "IEC 60947-2",
            "BS EN 60898-2",
        ]

    def test_only_clause_span_is_mined(self) -> None:
        """Test that references outside 1.3-1.4 are ignored."""
        text = "1.2 RELATED\nIEC 11111 Outside\n" + _span("IEC 22222 Inside")
        text += "\nIEC 33333 After"
        registry = mine_references("01 10", text)
        assert list(registry.references) == ["IEC 22222"]

    def test_same_line_list_shares_title(self) -> None:
        """Test two codes on one line both taking the trailing title."""
        registry = mine_references(
            "26 24 13", _span("IEC 61439-1 / IEC 61439-2 Switchgear assemblies")
        )
        assert {ref.id: ref.title for ref in registry.references.values()} == {
            "IEC 61439-1": "Switchgear assemblies",
            "IEC 61439-2": "Switchgear assemblies",
        }

    def test_missing_clause(self) -> None:
        """Test Part 1 text without clause 1.3."""
        registry = mine_references("01 10", "1.1 SUMMARY\nIEC 60947-2 Title")
        assert registry.references == {}
        assert registry.relations == []

    def test_registry_dedup_across_sections(self) -> None:
        """Test global id dedup and per-section relation dedup."""
        registry = ReferenceRegistry()
        mine_references("01 10", _span("IEC 60529", "IEC 60529"), registry)
        mine_references("01 20", _span("IEC 60529 Degrees of protection"), registry)

        assert len(registry.references) == 1
        assert registry.references["IEC 60529"].title == "Degrees of protection"
        assert [(r.section_id, r.reference_id) for r in registry.relations] == [
            ("01 10", "IEC 60529"),
            ("01 20", "IEC 60529"),
        ]

    def test_existing_title_not_overwritten(self) -> None:
        """Test that the first non-empty title wins."""
        registry = ReferenceRegistry()
        registry.add("01 10", "IEC 60529", "First")
        registry.add("01 20", "IEC 60529", "Second")
        assert registry.references["IEC 60529"].title == "First"


@pytest.mark.unit
class TestFindStandardIds:
    """Tests for find_standard_ids()."""

    def test_hyphen_spacing_normalized(self) -> None:
        """Test spaced hyphens reported in compact form."""
        found = find_standard_ids("Comply with ABC - 001 requirements.")
        assert [m.match for m in found] == ["ABC-001"]

    def test_multiple_ids_in_order(self) -> None:
        """Test document-order results with offsets."""
        found = find_standard_ids("Per IEC 60947-2 and ISO9001, see NFPA 70.")
        assert [m.match for m in found] == ["IEC 60947-2", "ISO9001", "NFPA 70"]
        assert [m.index for m in found] == sorted(m.index for m in found)

    def test_structural_words_excluded(self) -> None:
        """Test that section and page references are not standards."""
        assert find_standard_ids("See SECTION 26 and PAGE 12 of PART 2.") == []

    def test_no_ids(self) -> None:
        """Test prose without identifiers."""
        assert find_standard_ids("Install per manufacturer.") == []
