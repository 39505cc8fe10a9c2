"""Client-local key-value store backed by JSON files.

Each namespaced key lives in its own ``<key>.json`` file under the store
directory and holds a JSON list. There is no schema versioning: a missing
file reads as an empty list and a corrupt one is logged and reset.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


class LocalStore:
    """JSON file store for data kept outside the database."""

    def __init__(self, root: str | Path):
        """Initialize local store.

        Args:
            root: Directory holding one JSON file per key
        """
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key '{key}'")
        return self.root / f"{key}.json"

    def load(self, key: str) -> list[Any]:
        """Load the list stored under a key.

        Returns an empty list when the key is absent. Malformed content is
        logged, replaced with an empty list on disk and returned as empty.
        """
        path = self._path(key)
        if not path.exists():
            return []

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Resetting malformed local data for '%s': %s", key, e)
            self.save(key, [])
            return []

        if not isinstance(data, list):
            logger.warning(
                "Resetting local data for '%s': expected a list, got %s",
                key,
                type(data).__name__,
            )
            self.save(key, [])
            return []

        return data

    def save(self, key: str, items: list[Any]) -> None:
        """Replace the list stored under a key."""
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        os.replace(tmp_path, path)
        logger.debug("Saved %d item(s) under '%s'", len(items), key)

    def clear(self, key: str) -> None:
        """Remove a key entirely."""
        path = self._path(key)
        if path.exists():
            path.unlink()


def create_local_store(data_dir: Optional[str] = None) -> LocalStore:
    """Create a local store.

    Args:
        data_dir: Store directory. If None, checks FINTRACK_DATA_DIR
            environment variable, then defaults to ~/.fintrack/local
    """
    if data_dir is None:
        data_dir = os.environ.get("FINTRACK_DATA_DIR")

    if data_dir is None:
        data_dir = str(Path.home() / ".fintrack" / "local")

    return LocalStore(data_dir)
