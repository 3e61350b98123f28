"""Tool approval preference stores.

The conversation loop and the routers only depend on the ApprovalStore
protocol; the application creates one store at startup and injects it.
"""

import json
import logging
import threading
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from mcp_chat_server.approvals.types import ToolApproval

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ApprovalStore(Protocol):
    """Per-(server, tool) approval preferences. Missing entries mean False."""

    def get(self, server_name: str, tool_name: str) -> bool: ...

    def get_record(self, server_name: str, tool_name: str) -> ToolApproval | None: ...

    def set(
        self, server_name: str, tool_name: str, requires_approval: bool
    ) -> ToolApproval: ...

    def delete(self, server_name: str, tool_name: str) -> bool: ...

    def list_all(self) -> list[ToolApproval]: ...

    def list_requiring_approval(self) -> list[ToolApproval]: ...


class InMemoryApprovalStore:
    """Approval store kept in process memory."""

    def __init__(self, approvals: list[ToolApproval] | None = None) -> None:
        self._approvals: dict[tuple[str, str], ToolApproval] = {}
        self._lock = threading.Lock()
        for approval in approvals or []:
            self._approvals[(approval.server_name, approval.tool_name)] = approval

    def get(self, server_name: str, tool_name: str) -> bool:
        record = self.get_record(server_name, tool_name)
        return record.requires_approval if record is not None else False

    def get_record(self, server_name: str, tool_name: str) -> ToolApproval | None:
        return self._approvals.get((server_name, tool_name))

    def set(
        self, server_name: str, tool_name: str, requires_approval: bool
    ) -> ToolApproval:
        record = ToolApproval(
            server_name=server_name,
            tool_name=tool_name,
            requires_approval=requires_approval,
            updated_at=_now(),
        )
        with self._lock:
            key = (server_name, tool_name)
            previous = self._approvals.get(key)
            self._approvals[key] = record
            try:
                self._changed()
            except Exception:
                if previous is None:
                    del self._approvals[key]
                else:
                    self._approvals[key] = previous
                raise
        return record

    def delete(self, server_name: str, tool_name: str) -> bool:
        with self._lock:
            key = (server_name, tool_name)
            removed = self._approvals.pop(key, None)
            if removed is not None:
                try:
                    self._changed()
                except Exception:
                    self._approvals[key] = removed
                    raise
        return removed is not None

    def list_all(self) -> list[ToolApproval]:
        return sorted(
            self._approvals.values(), key=lambda a: (a.server_name, a.tool_name)
        )

    def list_requiring_approval(self) -> list[ToolApproval]:
        return [approval for approval in self.list_all() if approval.requires_approval]

    def _changed(self) -> None:
        """Hook called with the lock held after every modification.

        If it raises, the modification is undone before the error propagates.
        """


class JsonApprovalStore(InMemoryApprovalStore):
    """Approval store persisted to a single JSON file.

    The file holds {"approvals": [{...}, ...]} and is rewritten on every
    change. A missing file is treated as an empty store.
    """

    def __init__(self, path: Path) -> None:
        """Load approvals from disk.

        Args:
            path: Location of the JSON file; parent directories are created

        Raises:
            ValueError: If the file exists but cannot be parsed
        """
        self.path = path
        super().__init__(self._load())
        logger.debug(f"Loaded {len(self._approvals)} tool approvals from {path}")

    def _load(self) -> list[ToolApproval]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return [ToolApproval(**item) for item in data.get("approvals", [])]
        except (json.JSONDecodeError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid tool approvals file {self.path}: {e}") from e

    def _changed(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"approvals": [asdict(a) for a in self.list_all()]}

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)
        logger.debug(f"Saved tool approvals to {self.path}")
