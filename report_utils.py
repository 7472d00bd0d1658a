import html
import logging

from dictionary_store import DictionaryStore

logger = logging.getLogger(__name__)

# Telegram allows 4096 characters per message
MAX_MESSAGE_LENGTH = 4000


def pluralize(n: int, one: str, few: str, many: str) -> str:
    """Russian plural form: 1 сообщение, 2 сообщения, 5 сообщений."""
    mod10 = n % 10
    mod100 = n % 100
    if 11 <= mod100 <= 19:
        return many
    if mod10 == 1:
        return one
    if 2 <= mod10 <= 4:
        return few
    return many


def _section(lines: list[str], empty_label: str = "— нет") -> str:
    return "\n".join(lines) if lines else empty_label


def format_report(words: list[dict], store: DictionaryStore) -> str:
    """Builds the HTML report, splitting words into dictionary hits, guessed and untranslated."""
    seen = set()
    unique_words = []
    for w in words:
        key = str(w.get("word", "")).lower()
        if key in seen:
            continue
        seen.add(key)
        unique_words.append(w)

    from_dictionary = []
    translated = []
    untranslated = []
    for w in unique_words:
        word = str(w["word"])
        entry = store.find_word(word)
        if entry:
            from_dictionary.append((word, entry.translation))
            continue

        guess = w.get("possibleTranslation")
        if guess and guess != "null":
            translated.append((word, str(guess)))
        else:
            untranslated.append(word)

    dictionary_lines = [
        f"{i}. <b>{html.escape(word)}</b> — {html.escape(translation)}"
        for i, (word, translation) in enumerate(from_dictionary, 1)
    ]
    translated_lines = [
        f"{i}. <b>{html.escape(word)}</b> — {html.escape(translation)}"
        for i, (word, translation) in enumerate(translated, 1)
    ]
    untranslated_lines = [f"{i}. <b>{html.escape(word)}</b>" for i, word in enumerate(untranslated, 1)]

    report = "📖 <b>СЛОВАРЬ ЦИНЦКАРО</b>\n\n"
    report += (
        "Слова найденные в словаре:\n"
        f"{_section(dictionary_lines)}\n\n"
        "Переведенные слова:\n"
        f"{_section(translated_lines)}\n\n"
        "Непереведенные слова:\n"
        f"{_section(untranslated_lines)}"
    )
    report += f"\n\n📝 Найдено слов: {len(unique_words)}"
    return report


def append_discussion(report: str, summary: str) -> str:
    if not summary:
        return report
    return report + "\n\n---\n\n📝 <b>ПОДРОБНОЕ ОПИСАНИЕ ОБСУЖДЕНИЯ:</b>\n" + html.escape(summary, quote=False)


def chunk_string(text: str, size: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Splits text on line boundaries into chunks of at most `size` characters; longer lines are cut."""
    lines = []
    for line in text.split("\n"):
        while len(line) > size:
            lines.append(line[:size])
            line = line[size:]
        lines.append(line)

    chunks = []
    current = ""
    for line in lines:
        if len(current) + len(line) + 1 > size:
            if current:
                chunks.append(current)
            current = line
        else:
            current += ("\n" if current else "") + line
    if current:
        chunks.append(current)
    return chunks
