import json
import logging
import os
from dataclasses import dataclass, field

from dictionary_utils import DictionaryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DictionarySnapshot:
    entries: tuple[DictionaryEntry, ...] = ()
    index: dict[str, DictionaryEntry] = field(default_factory=dict)
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_artifact(cls, artifact: dict) -> "DictionarySnapshot":
        if not isinstance(artifact, dict):
            raise ValueError(f"Dictionary artifact must be a JSON object, got {type(artifact).__name__}")
        entries = tuple(DictionaryEntry.from_dict(item) for item in artifact.get("entries", []))
        index = {}
        for entry in entries:
            # First occurrence wins, same as a linear scan
            index.setdefault(entry.key, entry)
        return cls(entries=entries, index=index, metadata=dict(artifact.get("metadata", {})))


class DictionaryStore:
    """In-memory view of the dictionary artifact used for lookups while the bot runs."""

    def __init__(self, paths: list[str]):
        self.paths = list(paths)
        self._snapshot = DictionarySnapshot()

    def _find_artifact(self) -> str | None:
        for path in self.paths:
            if os.path.isfile(path):
                return path
        return None

    def reload(self) -> None:
        """Re-reads the artifact and swaps the snapshot in. Keeps the old snapshot on any failure."""
        path = self._find_artifact()
        if not path:
            logger.error(f"Dictionary not found. Tried: {', '.join(self.paths)}")
            return

        try:
            with open(path, "r", encoding="utf-8") as f:
                artifact = json.load(f)
            snapshot = DictionarySnapshot.from_artifact(artifact)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to load dictionary from {path}: {e}", exc_info=True)
            return

        # Single assignment so readers see either the old or the new snapshot
        self._snapshot = snapshot
        logger.info(f"Loaded {len(snapshot.entries)} dictionary entries from {path}")

        if snapshot.entries:
            sample = ", ".join(f"{e.word}={e.translation}" for e in snapshot.entries[:3])
            logger.debug(f"Sample entries: {sample}")

    @property
    def entries(self) -> tuple[DictionaryEntry, ...]:
        return self._snapshot.entries

    @property
    def metadata(self) -> dict:
        return self._snapshot.metadata

    def __len__(self) -> int:
        return len(self._snapshot.entries)

    def find_word(self, word: str) -> DictionaryEntry | None:
        return self._snapshot.index.get(word.lower().strip())

    def get_formatted_for_prompt(self) -> str:
        return "\n".join(f"{e.word} = {e.translation}" for e in self._snapshot.entries)
