"""Pytest configuration and shared fixtures for specstruct tests."""

import os
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

SWITCHBOARD_PAGE_1 = """Section 26 24 13
SWITCHBOARDS
PART 1 GENERAL
1.1 SUMMARY
A. Section includes low voltage switchboards.
1.2 RELATED SECTIONS
A. Section 26 05 19 - Low-Voltage Electrical Power Conductors and Cables.
B. Section 26 05 26 - Grounding and Bonding.
1.3 REFERENCES
IEC 60947-2 /
BS EN 60898-2   Low Voltage Switchgear
IEC 61439-1: Low-voltage switchgear assemblies
1.4 SUBMITTALS
A. Product data.
1.5 QUALITY ASSURANCE
A. Manufacturer qualifications.
1.6 DEFINITIONS
AC     Alternating Current
Medium Voltage   (MV)   Voltage between 1 kV and 36 kV
1.7 DELIVERY
A. Deliver in factory packaging.
1.8 WARRANTY
A. Two years."""

SWITCHBOARD_PAGE_2 = """PART 2 PRODUCTS
2.1 MANUFACTURERS
2.1.1 Approved Manufacturers
A. ABB, Schneider.
2.2 SWITCHBOARDS
2.2.1 Ratings
A. Comply with IEC 61439-2.
PART 3 EXECUTION
3.1 INSTALLATION
3.1.1 General
A. Install per manufacturer.
END OF SECTION"""

CONDUCTOR_PAGE = """Section 26 05 19
LOW-VOLTAGE CONDUCTORS
PART 1 GENERAL
1.1 SUMMARY
A. Conductors.
1.2 RELATED SECTIONS
A. Section 26 24 13 - Switchboards.
PART 2 PRODUCTS
2.1 CONDUCTORS
2.1.1 Copper
A. Annealed copper.
END OF SECTION"""


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env() -> Generator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Saves current environment and restores after test.

    Yields:
        Dictionary of original environment variables
    """
    original_env = os.environ.copy()
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def spec_pages() -> list[str]:
    """Three pages holding two complete sections with PART markers.

    Section 26 24 13 spans pages 1-2, Section 26 05 19 is on page 3.
    """
    return [SWITCHBOARD_PAGE_1, SWITCHBOARD_PAGE_2, CONDUCTOR_PAGE]


@pytest.fixture
def part_one_text() -> str:
    """Part 1 body of Section 26 24 13 (text after the PART 1 marker)."""
    return SWITCHBOARD_PAGE_1.split("PART 1 GENERAL\n", 1)[1]


def pytest_configure(config: Any) -> None:
    """Configure pytest with marker options."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )
