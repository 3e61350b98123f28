"""Unit tests for the tool approval stores."""

import json

import pytest

from mcp_chat_server.approvals import (
    InMemoryApprovalStore,
    JsonApprovalStore,
    ToolApproval,
)


@pytest.fixture
def approvals_file(tmp_path):
    """Path for a JSON approvals file inside a temp directory."""
    return tmp_path / "data" / "tool_approvals.json"


class TestInMemoryApprovalStore:
    """Tests for the in-memory store."""

    def test_missing_entry_defaults_to_false(self):
        """Test that tools without an entry do not require approval."""
        store = InMemoryApprovalStore()

        assert store.get("files", "delete") is False
        assert store.get_record("files", "delete") is None

    def test_set_and_get(self):
        """Test storing an approval preference."""
        store = InMemoryApprovalStore()

        record = store.set("files", "delete", True)

        assert store.get("files", "delete") is True
        assert record.requires_approval is True
        assert record.updated_at.endswith("Z")

    def test_set_overwrites(self):
        """Test that setting again updates the existing entry."""
        store = InMemoryApprovalStore()
        store.set("files", "delete", True)

        store.set("files", "delete", False)

        assert store.get("files", "delete") is False
        assert len(store.list_all()) == 1

    def test_delete(self):
        """Test deleting an entry restores the default."""
        store = InMemoryApprovalStore()
        store.set("files", "delete", True)

        assert store.delete("files", "delete") is True
        assert store.delete("files", "delete") is False
        assert store.get("files", "delete") is False

    def test_list_sorted_and_filtered(self):
        """Test listing all entries and those requiring approval."""
        store = InMemoryApprovalStore()
        store.set("news", "search", False)
        store.set("files", "write", True)
        store.set("files", "delete", True)

        assert [(a.server_name, a.tool_name) for a in store.list_all()] == [
            ("files", "delete"),
            ("files", "write"),
            ("news", "search"),
        ]
        assert [a.tool_name for a in store.list_requiring_approval()] == [
            "delete",
            "write",
        ]

    def test_initial_approvals(self):
        """Test seeding the store with existing records."""
        store = InMemoryApprovalStore(
            [ToolApproval(server_name="calc", tool_name="add", requires_approval=True)]
        )

        assert store.get("calc", "add") is True


class TestJsonApprovalStore:
    """Tests for the JSON file backed store."""

    def test_missing_file_is_empty(self, approvals_file):
        """Test that a missing file gives an empty store."""
        store = JsonApprovalStore(approvals_file)

        assert store.list_all() == []
        assert not approvals_file.exists()

    def test_changes_are_persisted(self, approvals_file):
        """Test that a new store instance sees earlier changes."""
        store = JsonApprovalStore(approvals_file)
        store.set("files", "delete", True)
        store.set("news", "search", False)

        reloaded = JsonApprovalStore(approvals_file)

        assert reloaded.get("files", "delete") is True
        assert reloaded.get("news", "search") is False
        assert len(reloaded.list_all()) == 2

    def test_file_format(self, approvals_file):
        """Test the on-disk JSON structure."""
        JsonApprovalStore(approvals_file).set("files", "delete", True)

        with open(approvals_file, encoding="utf-8") as f:
            data = json.load(f)

        assert data["approvals"][0]["server_name"] == "files"
        assert data["approvals"][0]["tool_name"] == "delete"
        assert data["approvals"][0]["requires_approval"] is True

    def test_delete_is_persisted(self, approvals_file):
        """Test that deletions are written to disk."""
        store = JsonApprovalStore(approvals_file)
        store.set("files", "delete", True)
        store.delete("files", "delete")

        assert JsonApprovalStore(approvals_file).list_all() == []

    def test_invalid_file_raises(self, approvals_file):
        """Test that a corrupt file is reported."""
        approvals_file.parent.mkdir(parents=True)
        approvals_file.write_text("not json", encoding="utf-8")

        with pytest.raises(ValueError):
            JsonApprovalStore(approvals_file)

    def test_failed_write_leaves_store_unchanged(self, tmp_path):
        """Test that a setting which cannot be saved is not enforced."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        store = JsonApprovalStore(blocker / "tool_approvals.json")

        with pytest.raises(OSError):
            store.set("calc", "add", True)

        assert store.get("calc", "add") is False
        assert store.list_all() == []

    def test_failed_update_keeps_previous_value(self, approvals_file, tmp_path):
        """Test that a failed overwrite restores the earlier setting."""
        store = JsonApprovalStore(approvals_file)
        store.set("calc", "add", True)
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        store.path = blocker / "tool_approvals.json"

        with pytest.raises(OSError):
            store.set("calc", "add", False)

        assert store.get("calc", "add") is True

    def test_failed_delete_keeps_entry(self, approvals_file, tmp_path):
        """Test that a deletion which cannot be saved is undone."""
        store = JsonApprovalStore(approvals_file)
        store.set("calc", "add", True)
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        store.path = blocker / "tool_approvals.json"

        with pytest.raises(OSError):
            store.delete("calc", "add")

        assert store.get("calc", "add") is True
