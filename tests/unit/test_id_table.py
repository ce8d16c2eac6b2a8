"""Unit tests for the ID list table."""

import io
import json

import pytest

from logid.lut.id_table import EMPTY_FILE, IDTable
from logid.models.format import FormatDescriptor
from logid.services.exceptions import IDListReadError, ListWriteError, ParseError


class TestLoad:
    """Tests for parsing ID list documents."""

    def test_empty_bytes(self):
        """Test that an empty document is an empty table."""
        assert len(IDTable.load(b"")) == 0

    def test_whitespace_only(self):
        """Test that a whitespace-only document is an empty table."""
        assert len(IDTable.load(b"\n")) == 0

    def test_parses_entries(self):
        """Test parsing a document with two entries."""
        table = IDTable.load(
            b'{"10": {"Type": "TRICE8", "Strg": "a %d"}, "11": {"Type": "TRICE16_1", "Strg": "b %x"}}'
        )
        assert len(table) == 2
        assert table[10] == FormatDescriptor(type="TRICE8", strg="a %d")
        assert table[11].type == "TRICE16_1"

    def test_ignores_extra_fields(self):
        """Test that unknown descriptor fields are ignored."""
        table = IDTable.load(b'{"5": {"Type": "T", "Strg": "s", "Note": "x"}}')
        assert table[5].strg == "s"

    def test_invalid_json(self):
        """Test that malformed JSON raises ParseError."""
        with pytest.raises(ParseError, match="Malformed list file"):
            IDTable.load(b"{not json")

    def test_top_level_not_object(self):
        """Test that a JSON array is rejected."""
        with pytest.raises(ParseError, match="JSON object"):
            IDTable.load(b"[1, 2]")

    def test_non_numeric_key(self):
        """Test that a non-decimal key is rejected."""
        with pytest.raises(ParseError):
            IDTable.load(b'{"abc": {"Type": "T", "Strg": "s"}}')

    @pytest.mark.parametrize("key", ["010", "10.0", "+10", " 10", "-0", "1e1"])
    def test_non_canonical_key(self, key):
        """Test that alternative spellings of an ID are rejected."""
        document = json.dumps({key: {"Type": "T", "Strg": "s"}}).encode()

        with pytest.raises(ParseError, match="canonical decimal ID"):
            IDTable.load(document)

    def test_aliased_keys_not_merged(self):
        """Test that two spellings of one ID fail instead of collapsing."""
        document = (
            b'{"10": {"Type": "A", "Strg": "a"}, "010": {"Type": "B", "Strg": "b"},'
            b' "10.0": {"Type": "C", "Strg": "c"}}'
        )

        with pytest.raises(ParseError):
            IDTable.load(document)

    def test_repeated_key(self):
        """Test that a key written twice is rejected."""
        with pytest.raises(ParseError, match="duplicate key '7'"):
            IDTable.load(b'{"7": {"Type": "A", "Strg": "a"}, "7": {"Type": "B", "Strg": "b"}}')

    def test_negative_key(self):
        """Test that a negative ID in canonical form is accepted."""
        assert IDTable.load(b'{"-3": {"Type": "T", "Strg": "s"}}').ids() == [-3]

    def test_missing_field(self):
        """Test that a descriptor without Strg is rejected."""
        with pytest.raises(ParseError, match="wrong shape"):
            IDTable.load(b'{"1": {"Type": "T"}}')

    def test_wrong_value_type(self):
        """Test that a non-string Type is rejected."""
        with pytest.raises(ParseError):
            IDTable.load(b'{"1": {"Type": 8, "Strg": "s"}}')

    def test_from_json_merges(self):
        """Test that from_json overwrites existing keys and adds new ones."""
        table = IDTable({1: FormatDescriptor(type="A", strg="old"), 2: FormatDescriptor(type="B", strg="keep")})
        table.from_json(b'{"1": {"Type": "A", "Strg": "new"}, "3": {"Type": "C", "Strg": "added"}}')
        assert table[1].strg == "new"
        assert table[2].strg == "keep"
        assert table[3].strg == "added"


class TestSerialize:
    """Tests for writing ID list documents."""

    def test_round_trip(self, sample_table):
        """Test that load(to_json(t)) reproduces t."""
        loaded = IDTable.load(sample_table.to_json())

        assert loaded == sample_table
        for id_ in sample_table.ids():
            assert loaded[id_].type == sample_table[id_].type
            assert loaded[id_].strg == sample_table[id_].strg

    def test_tab_indented_sorted_keys(self):
        """Test the on-disk layout."""
        table = IDTable({
            100: FormatDescriptor(type="B", strg="two"),
            9: FormatDescriptor(type="A", strg="one"),
        })
        text = table.to_json().decode("utf-8")
        assert text.splitlines()[1] == '\t"9": {'
        assert '\t\t"Type": "A",' in text
        assert text.index('"9"') < text.index('"100"')
        assert json.loads(text) == {
            "9": {"Type": "A", "Strg": "one"},
            "100": {"Type": "B", "Strg": "two"},
        }

    def test_non_ascii_kept(self):
        """Test that non-ASCII characters are written verbatim."""
        table = IDTable({1: FormatDescriptor(type="T", strg="Temperatur %d °C")})
        assert "°C".encode("utf-8") in table.to_json()

    def test_empty_table(self):
        """Test serializing an empty table."""
        assert IDTable().to_json() == b"{}"


class TestFiles:
    """Tests for loading and saving list files."""

    def test_sentinel_path(self, tmp_path, monkeypatch):
        """Test that the sentinel path never touches the file system."""
        monkeypatch.chdir(tmp_path)
        table = IDTable.load_from_file(EMPTY_FILE, out=io.StringIO())
        assert len(table) == 0
        assert not (tmp_path / EMPTY_FILE).exists()

    def test_missing_file_is_fatal(self, tmp_path):
        """Test that a missing ID list raises instead of starting empty."""
        with pytest.raises(IDListReadError, match="create an empty file first"):
            IDTable.load_from_file(tmp_path / "missing.json", out=io.StringIO())

    def test_empty_file(self, tmp_path):
        """Test that an existing empty file is an empty table."""
        path = tmp_path / "til.json"
        path.touch()
        assert len(IDTable.load_from_file(path, out=io.StringIO())) == 0

    def test_load_reports_count(self, id_list_file):
        """Test the diagnostic written after loading."""
        out = io.StringIO()
        table = IDTable.load_from_file(id_list_file, out=out)
        assert len(table) == 3
        assert "with 3 items" in out.getvalue()

    def test_malformed_file(self, tmp_path):
        """Test that a malformed file raises ParseError naming the path."""
        path = tmp_path / "til.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ParseError) as excinfo:
            IDTable.load_from_file(path, out=io.StringIO())
        assert excinfo.value.path == str(path)

    def test_save_and_reload(self, tmp_path, sample_table):
        """Test saving to disk and loading back."""
        path = tmp_path / "til.json"
        sample_table.save_to_file(path)
        assert IDTable.load_from_file(path, out=io.StringIO()) == sample_table

    def test_save_overwrites(self, tmp_path, sample_table):
        """Test that saving truncates previous content."""
        path = tmp_path / "til.json"
        path.write_text("x" * 10000, encoding="utf-8")
        IDTable({1: FormatDescriptor(type="T", strg="s")}).save_to_file(path)
        assert len(IDTable.load_from_file(path, out=io.StringIO())) == 1

    def test_save_failure_is_fatal(self, tmp_path, sample_table):
        """Test that a write into a missing directory raises ListWriteError."""
        with pytest.raises(ListWriteError):
            sample_table.save_to_file(tmp_path / "no" / "such" / "dir" / "til.json")


class TestMapping:
    """Tests for the mapping interface."""

    def test_add_and_lookup(self):
        """Test insertion and lookup."""
        table = IDTable()
        descriptor = FormatDescriptor(type="T", strg="s")
        table.add(42, descriptor)
        assert 42 in table
        assert table.get(42) == descriptor
        assert table.get(43) is None
        assert list(table) == [42]

    def test_ids_sorted(self, make_table):
        """Test that ids() and items() are in ascending order."""
        table = make_table(30, 10, 20)
        assert table.ids() == [10, 20, 30]
        assert [i for i, _ in table.items()] == [10, 20, 30]
