"""Tests for Project Launcher data models."""

import pytest

from project_launcher.models import EDIT_FIELDS, FIELD_LABELS, UNCATEGORIZED, Record


class TestRecord:
    """Tests for the Record model."""

    def test_record_creation(self) -> None:
        """Test creating a record with every field."""
        record = Record(
            name="api",
            path="/home/x/api",
            command="python main.py",
            link="http://localhost:8000",
            category="Web",
        )
        assert record.name == "api"
        assert record.path == "/home/x/api"
        assert record.command == "python main.py"
        assert record.link == "http://localhost:8000"
        assert record.category == "Web"

    def test_record_defaults(self) -> None:
        """Test optional fields default to empty strings."""
        record = Record(name="api", path="/home/x/api", command="make")
        assert record.link == ""
        assert record.category == ""

    def test_null_fields_become_empty(self) -> None:
        """Test JSON null is treated like an absent key."""
        record = Record.model_validate(
            {"name": "api", "path": "/p", "command": "c", "link": None, "category": None}
        )
        assert record.link == ""
        assert record.category == ""

    def test_unknown_keys_ignored(self) -> None:
        """Test extra keys in stored data do not break loading."""
        record = Record.model_validate({"name": "api", "path": "/p", "command": "c", "stars": 5})
        assert record.name == "api"
        assert not hasattr(record, "stars")


class TestDisplayCategory:
    """Tests for category display mapping."""

    def test_empty_category_displays_na(self) -> None:
        """Test empty category shows as N/A but stays empty."""
        record = Record(name="a", category="")
        assert record.display_category == UNCATEGORIZED
        assert record.category == ""

    def test_whitespace_category_displays_na(self) -> None:
        """Test a whitespace-only category counts as uncategorized, while stored as-is."""
        record = Record(name="a", category="   ")
        assert record.display_category == "N/A"
        assert record.category == "   "

    def test_named_category_kept(self) -> None:
        """Test a real category is shown as stored."""
        assert Record(name="a", category="Tools").display_category == "Tools"


class TestFieldOrdinals:
    """Tests for ordinal field access used by the editor."""

    def test_ordinal_order(self) -> None:
        """Test edit ordinals follow name, path, command, link, category."""
        assert EDIT_FIELDS == ("name", "path", "command", "link", "category")
        assert FIELD_LABELS[3] == "Link"

    def test_get_field(self) -> None:
        """Test reading each field by ordinal."""
        record = Record(name="n", path="p", command="c", link="l", category="g")
        assert [record.get_field(i) for i in range(5)] == ["n", "p", "c", "l", "g"]

    def test_set_field(self) -> None:
        """Test writing a field by ordinal."""
        record = Record(name="n")
        record.set_field(4, "Games")
        assert record.category == "Games"

    def test_ordinal_out_of_range(self) -> None:
        """Test invalid ordinals raise IndexError."""
        record = Record(name="n")
        with pytest.raises(IndexError):
            record.get_field(5)
        with pytest.raises(IndexError):
            record.set_field(-1, "x")

    def test_identity_triple(self) -> None:
        """Test identity ignores link and category."""
        a = Record(name="n", path="p", command="c", link="x", category="A")
        b = Record(name="n", path="p", command="c", link="y", category="B")
        assert a.identity == b.identity == ("n", "p", "c")
