"""Named key storage.

Saved keys are (name, pattern) pairs kept in a JSON file under a fixed
namespace, e.g.

    {"pcl_patterns_v1": [{"name": "demo", "pattern": "3-1-4-2"}]}

The store only deals in pattern strings; callers turn them into keys with
PermutationKey.from_pattern.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from cipherlab.permutation.errors import KeyStoreError

logger = logging.getLogger(__name__)

STORAGE_KEY = "pcl_patterns_v1"
DEFAULT_STORE_PATH = Path.home() / ".cipherlab" / "keys.json"
STORE_ENV_VAR = "CIPHERLAB_STORE"


@dataclass
class SavedKey:
    """A named pattern string."""
    name: str
    pattern: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "pattern": self.pattern}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SavedKey":
        return cls(name=str(d["name"]), pattern=str(d["pattern"]))


def default_store_path() -> Path:
    """Store location, from $CIPHERLAB_STORE or ~/.cipherlab/keys.json."""
    env = os.environ.get(STORE_ENV_VAR)
    return Path(env) if env else DEFAULT_STORE_PATH


class KeyStore:
    """Ordered collection of saved keys backed by a JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else default_store_path()

    def load(self) -> List[SavedKey]:
        """Load saved keys.

        A missing file is an empty store. An unreadable or malformed file is
        logged and treated as empty.
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            entries = data.get(STORAGE_KEY, []) if isinstance(data, dict) else []
            if not isinstance(entries, list):
                return []
            return [SavedKey.from_dict(entry) for entry in entries]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Failed to load saved patterns from %s: %s", self.path, e)
            return []

    def save(self, entries: List[SavedKey]) -> None:
        """Write saved keys, replacing the file contents.

        Raises:
            KeyStoreError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({STORAGE_KEY: [e.to_dict() for e in entries]}, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Failed to save patterns to %s: %s", self.path, e)
            raise KeyStoreError(f"Failed to save patterns: {e}") from e
        logger.debug("Saved %d patterns to %s", len(entries), self.path)

    def add(self, name: str, pattern: str) -> SavedKey:
        """Save a pattern under a name, replacing any entry with that name.

        Raises:
            KeyStoreError: If the name is empty.
        """
        name = (name or "").strip()
        if not name:
            raise KeyStoreError("A name is required to save a key")

        entries = self.load()
        for entry in entries:
            if entry.name == name:
                entry.pattern = pattern
                break
        else:
            entries.append(SavedKey(name=name, pattern=pattern))
        self.save(entries)
        return SavedKey(name=name, pattern=pattern)

    def remove(self, name: str) -> None:
        """Delete the entry with the given name.

        Raises:
            KeyStoreError: If no entry has that name.
        """
        entries = self.load()
        remaining = [e for e in entries if e.name != name]
        if len(remaining) == len(entries):
            raise KeyStoreError(f"No saved key named {name!r}")
        self.save(remaining)

    def get(self, name: str) -> SavedKey:
        """Look up an entry by name.

        Raises:
            KeyStoreError: If no entry has that name.
        """
        for entry in self.load():
            if entry.name == name:
                return entry
        raise KeyStoreError(f"No saved key named {name!r}")

    def names(self) -> List[str]:
        return [e.name for e in self.load()]
