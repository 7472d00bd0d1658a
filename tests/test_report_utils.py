from __future__ import annotations

from dictionary_store import DictionaryStore
from report_utils import append_discussion, chunk_string, format_report, pluralize


def test_pluralize_russian_forms():
    forms = ("сообщение", "сообщения", "сообщений")
    assert pluralize(1, *forms) == "сообщение"
    assert pluralize(21, *forms) == "сообщение"
    assert pluralize(3, *forms) == "сообщения"
    assert pluralize(11, *forms) == "сообщений"
    assert pluralize(14, *forms) == "сообщений"
    assert pluralize(100, *forms) == "сообщений"


def test_format_report_sections(artifact_path):
    store = DictionaryStore([str(artifact_path)])
    store.reload()
    words = [
        {"word": "Ана", "possibleTranslation": "мама", "context": "ана пришла"},
        {"word": "ана", "possibleTranslation": None, "context": "дубль"},
        {"word": "хгар", "possibleTranslation": "снег", "context": "хгар идёт"},
        {"word": "къыз", "possibleTranslation": "null", "context": "?"},
        {"word": "<b>", "possibleTranslation": None, "context": ""},
    ]

    report = format_report(words, store)

    assert "Слова найденные в словаре:\n1. <b>Ана</b> — мать" in report
    assert "Переведенные слова:\n1. <b>хгар</b> — снег" in report
    assert "Непереведенные слова:\n1. <b>къыз</b>\n2. <b>&lt;b&gt;</b>" in report
    assert report.endswith("📝 Найдено слов: 4")


def test_format_report_with_no_words(tmp_path):
    report = format_report([], DictionaryStore([str(tmp_path / "none.json")]))
    assert report.count("— нет") == 3
    assert report.endswith("Найдено слов: 0")


def test_append_discussion_escapes_summary():
    report = append_discussion("R", "Обсуждали <праздник> & гостей")
    assert report.startswith("R\n\n---\n\n")
    assert "Обсуждали &lt;праздник&gt; &amp; гостей" in report
    assert append_discussion("R", "") == "R"


def test_chunk_string_splits_on_lines():
    text = "\n".join(["x" * 30] * 10)
    chunks = chunk_string(text, size=100)
    assert all(len(chunk) <= 100 for chunk in chunks)
    assert "\n".join(chunks) == text
    assert len(chunks) == 4


def test_chunk_string_cuts_lines_longer_than_size():
    text = "a\n" + "x" * 250 + "\nb"
    chunks = chunk_string(text, size=100)
    assert all(len(chunk) <= 100 for chunk in chunks)
    assert "".join(chunks).replace("\n", "") == "a" + "x" * 250 + "b"


def test_chunk_string_short_text_is_one_chunk():
    assert chunk_string("a\nb") == ["a\nb"]
