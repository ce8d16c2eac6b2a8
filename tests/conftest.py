"""Shared test fixtures for all test modules."""

import pytest

from logid.lut.id_table import IDTable
from logid.models.format import FormatDescriptor


@pytest.fixture
def make_table():
    """Factory building an IDTable whose keys are the given IDs, each with its own format string."""
    def _make(*ids: int) -> IDTable:
        return IDTable({i: FormatDescriptor(type="TRICE16", strg=f"value %d #{i}") for i in ids})
    return _make


@pytest.fixture
def sample_table():
    """Small ID table with mixed type tags."""
    return IDTable({
        10000: FormatDescriptor(type="TRICE8_2", strg="hi %03u, %5x"),
        10001: FormatDescriptor(type="TRICE16", strg="hi %03u, %5x"),
        10002: FormatDescriptor(type="trice32", strg="temperature %d.%02d C"),
    })


@pytest.fixture
def id_list_file(tmp_path, sample_table):
    """ID list file on disk holding sample_table."""
    path = tmp_path / "til.json"
    path.write_bytes(sample_table.to_json())
    return path
