"""
Local Key/Value Store

JSON-file-backed key/value space shared by the user profile and the
watched ledger. Every write replaces the whole file atomically.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_settings
from ..core.logging import get_logger

logger = get_logger(__name__)


class LocalStore:
    """
    Small synchronous key/value store.
    
    A missing or unreadable file loads as an empty store; startup never
    fails because of local data.
    """
    
    def __init__(self, path: Optional[os.PathLike] = None):
        if path is None:
            path = get_settings().storage_path
        self.path = Path(path).expanduser()
        self._lock = threading.RLock()
        self._data: Dict[str, Any] = self._load()
    
    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("local_store_load_failed", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("local_store_not_a_mapping", path=str(self.path))
            return {}
        return data
    
    def _flush(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
    
    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)
    
    def set(self, key: str, value: Any):
        """Store a JSON-serializable value and persist the snapshot."""
        with self._lock:
            self._data[key] = value
            self._flush()
    
    def delete(self, key: str):
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._flush()
    
    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data


# Singleton
_local_store: Optional[LocalStore] = None


def get_local_store() -> LocalStore:
    """Get singleton LocalStore instance."""
    global _local_store
    if _local_store is None:
        _local_store = LocalStore()
    return _local_store
