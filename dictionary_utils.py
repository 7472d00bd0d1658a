"""
Dictionary entry model plus the row classification and sheet merging rules
"""
import logging
from dataclasses import dataclass
from typing import NamedTuple

logger = logging.getLogger(__name__)

# Labels editors put in the part-of-speech column, typos included
VALID_PARTS_OF_SPEECH = {
    "существительное",
    "существительные",
    "существительно",
    "глагол",
    "прилагательное",
    "прилагательный",
    "прилагательнле",
    "наречие",
    "местоимение",
    "союз",
    "междометие",
    "предлог",
    "частица",
    "числительное",
    "причастие",
    "сущ+глагол",
    "глагол-наречие",
    "фразеологизм",
    "словосочетание",
    "вводное слово",
    "вводное соово",
    "обращение",
    "наречный оборот",
    "предлог + существительное",
}

# Any label containing one of these is treated as a part of speech
PART_OF_SPEECH_MARKERS = ("словосочетание", "выражение")

PART_OF_SPEECH_CANONICAL = {
    "существительное": "существительное",
    "существительные": "существительное",
    "существительно": "существительное",
    "сущ": "существительное",
    "сущ+глагол": "сущ+глагол",
    "глагол": "глагол",
    "глагол-наречие": "глагол-наречие",
    "прилагательное": "прилагательное",
    "наречие": "наречие",
    "местоимение": "местоимение",
    "союз": "союз",
    "междометие": "междометие",
    "предлог": "предлог",
    "частица": "частица",
    "числительное": "числительное",
}


@dataclass(frozen=True)
class DictionaryEntry:
    word: str
    translation: str
    part_of_speech: str | None = None
    comments: str | None = None

    @property
    def key(self) -> str:
        """Lookup key shared by merging and the store."""
        return self.word.lower().strip()

    def to_dict(self) -> dict:
        data = {"word": self.word, "translation": self.translation}
        if self.part_of_speech:
            data["partOfSpeech"] = self.part_of_speech
        if self.comments:
            data["comments"] = self.comments
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DictionaryEntry":
        return cls(
            word=data["word"],
            translation=data["translation"],
            part_of_speech=data.get("partOfSpeech") or None,
            comments=data.get("comments") or None,
        )


class SheetRow(NamedTuple):
    word: str
    translation: str
    part_of_speech: str
    comments: str

    @classmethod
    def from_cells(cls, cells: list[str]) -> "SheetRow":
        padded = list(cells[:4]) + [""] * (4 - min(len(cells), 4))
        return cls(*padded)


def is_part_of_speech(label: str | None) -> bool:
    if not label:
        return False
    normalized = label.lower().strip()
    return normalized in VALID_PARTS_OF_SPEECH or any(marker in normalized for marker in PART_OF_SPEECH_MARKERS)


def normalize_part_of_speech(label: str) -> str:
    label = label.strip()
    return PART_OF_SPEECH_CANONICAL.get(label.lower(), label)


def classify_row(row: SheetRow) -> DictionaryEntry | None:
    """Builds an entry from one sheet row, or returns None if the row lacks a word or translation."""
    word, translation, part_of_speech, comments = row
    if not word.strip() or not translation.strip():
        return None

    # Part of speech typed into the translation column and the translation into the next one
    if is_part_of_speech(translation) and part_of_speech.strip() and not is_part_of_speech(part_of_speech):
        translation, part_of_speech = part_of_speech, translation

    return DictionaryEntry(
        word=word.strip(),
        translation=translation.strip(),
        part_of_speech=normalize_part_of_speech(part_of_speech) if part_of_speech.strip() else None,
        comments=comments.strip() or None,
    )


def convert_to_dictionary(rows: list[list[str]]) -> list[DictionaryEntry]:
    """Classifies every row after the header row of one sheet."""
    entries = []
    for cells in rows[1:]:
        entry = classify_row(SheetRow.from_cells(cells))
        if entry is not None:
            entries.append(entry)
    dropped = max(len(rows) - 1, 0) - len(entries)
    if dropped:
        logger.debug(f"Dropped {dropped} rows without word or translation")
    return entries


def merge_sheet_entries(sheets_entries: list[list[DictionaryEntry]]) -> list[DictionaryEntry]:
    """
    Combines per-sheet entry lists, first sheet taking precedence.

    Only words of the first sheet are used for deduplication: later sheets drop
    entries colliding with it, but are not deduplicated against each other.
    """
    if not sheets_entries:
        return []

    primary, *secondary = sheets_entries
    primary_words = {entry.key for entry in primary}
    merged = list(primary)
    for entries in secondary:
        merged.extend(entry for entry in entries if entry.key not in primary_words)
    return merged
