# =============================================================================
# lib/local_cache.py - Local Package Cache
# =============================================================================
# A JSON file holding package records keyed by code. The package service
# falls back to it when Supabase cannot be reached, so scanning keeps working
# through network outages. Records are stored in the same shape as the
# remote rows (snake_case columns).
#
# Usage:
#   cache = LocalPackageCache("/tmp/packages.json")
#   cache.save({"code": "25011500001", "status": "pending"})
#   cache.get("25011500001")
# =============================================================================

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalCacheError(Exception):
    """Raised when the cache file cannot be written."""


class LocalPackageCache:
    """
    File-backed map of package code -> row dict.

    Reads tolerate a missing or corrupt file (treated as empty);
    writes raise LocalCacheError.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable package cache {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed package cache {self.path}")
            return {}
        return data

    def _store(self, data: dict[str, dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise LocalCacheError(f"Failed to write package cache {self.path}: {e}") from e

    def all(self) -> list[dict[str, Any]]:
        """All cached records, newest first by created_at."""
        records = list(self._load().values())
        records.sort(key=lambda r: r.get("created_at") or "", reverse=True)
        return records

    def get(self, code: str) -> dict[str, Any] | None:
        return self._load().get(code)

    def save(self, record: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace a record by its code."""
        data = self._load()
        data[record["code"]] = record
        self._store(data)
        logger.info(f"Saved package {record['code']} to local cache")
        return record

    def delete(self, codes: list[str]) -> int:
        """Remove records by code. Returns how many were removed."""
        data = self._load()
        removed = 0
        for code in codes:
            if data.pop(code, None) is not None:
                removed += 1
        if removed:
            self._store(data)
        return removed

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
