from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

INDEX_VERSION = 1


def empty_index() -> Dict[str, Any]:
    return {"version": INDEX_VERSION, "projects": {}}


class MetadataStore:
    """Project index kept in a single JSON file next to the graph snapshots."""

    def __init__(self, metadata_file: Path) -> None:
        self.metadata_file = metadata_file
        self.metadata_file.parent.mkdir(parents=True, exist_ok=True)
        self.data: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        if not self.metadata_file.exists():
            return empty_index()
        try:
            raw = json.loads(self.metadata_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Project index {self.metadata_file} is unreadable, starting empty")
            return empty_index()
        if not isinstance(raw, dict) or not isinstance(raw.get("projects"), dict):
            return empty_index()
        raw.setdefault("version", INDEX_VERSION)
        return raw

    @property
    def projects(self) -> Dict[str, Dict[str, Any]]:
        return self.data["projects"]

    def save(self) -> None:
        self.metadata_file.write_text(json.dumps(self.data, indent=2), encoding="utf-8")
