from __future__ import annotations

from dictionary_store import DictionaryStore
from dictionary_utils import DictionaryEntry


def test_empty_store_before_reload(tmp_path):
    store = DictionaryStore([str(tmp_path / "missing.json")])
    assert len(store) == 0
    assert store.find_word("ана") is None
    assert store.get_formatted_for_prompt() == ""


def test_reload_and_find_word(artifact_path):
    store = DictionaryStore([str(artifact_path)])
    store.reload()

    assert len(store) == 3
    assert store.find_word("  АНА ") == DictionaryEntry("ана", "мать", "существительное")
    assert store.find_word("ан") is None
    assert store.metadata["name"] == "test"


def test_formatted_for_prompt(artifact_path):
    store = DictionaryStore([str(artifact_path)])
    store.reload()
    assert store.get_formatted_for_prompt() == "гхал = оставаться\nана = мать\nбаба = отец, папа"


def test_reload_twice_gives_same_lookups(artifact_path):
    store = DictionaryStore([str(artifact_path)])
    store.reload()
    first = (store.entries, store.find_word("гхал"), store.find_word("нет"))
    store.reload()
    assert (store.entries, store.find_word("гхал"), store.find_word("нет")) == first


def test_reload_uses_first_existing_path(tmp_path, artifact_path):
    store = DictionaryStore([str(tmp_path / "nope.json"), str(artifact_path)])
    store.reload()
    assert len(store) == 3


def test_failed_reload_keeps_previous_snapshot(artifact_path):
    store = DictionaryStore([str(artifact_path)])
    store.reload()

    artifact_path.write_text("{not json", encoding="utf-8")
    store.reload()
    assert len(store) == 3

    artifact_path.unlink()
    store.reload()
    assert store.find_word("баба").translation == "отец, папа"


def test_reload_of_non_object_artifact_keeps_previous_snapshot(artifact_path):
    store = DictionaryStore([str(artifact_path)])
    store.reload()

    artifact_path.write_text("[]", encoding="utf-8")
    store.reload()
    assert len(store) == 3

    artifact_path.write_text('{"entries": 5}', encoding="utf-8")
    store.reload()
    assert store.find_word("ана").translation == "мать"


def test_find_word_returns_first_of_duplicates(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text(
        '{"metadata": {}, "entries": ['
        '{"word": "джан", "translation": "душа"}, {"word": "Джан", "translation": "милый"}]}',
        encoding="utf-8",
    )
    store = DictionaryStore([str(path)])
    store.reload()
    assert store.find_word("ДЖАН").translation == "душа"
