"""
Tsintskaro alphabet and collation.

The alphabet is Cyrillic-based with a few extra letters, three of which are
written with two characters (Гх, Дж, Хг) and sort as single letters.
"""

TSINTSKARO_ALPHABET = [
    'А', 'Â', 'Б', 'В', 'Г', 'Гх', 'Д', 'Дж',
    'Е', 'Ё', 'Ж', 'З', 'И', 'Û', 'Й', 'К',
    'Л', 'М', 'Н', 'О', 'Ô', 'П', 'Р', 'С',
    'Т', 'У', 'Ŷ', 'Ф', 'Х', 'Хг', 'Ц', 'Ч',
    'Ш', 'Щ', 'Ъ', 'Ы', 'Ь', 'Э', 'Ю', 'Я',
]

# Checked in this order at every position
MULTI_CHAR_LETTERS = ['Гх', 'Дж', 'Хг']

LETTER_ORDER = {letter.upper(): index for index, letter in enumerate(TSINTSKARO_ALPHABET)}

# Rank for digits, Latin letters, punctuation - after every real letter
UNKNOWN_RANK = 999


def tokenize_word(word: str) -> list[str]:
    """Splits a word into uppercase letters, keeping two-character letters whole.

    >>> tokenize_word("Гход")
    ['ГХ', 'О', 'Д']
    """
    upper = word.upper()
    tokens = []
    i = 0
    while i < len(upper):
        for letter in MULTI_CHAR_LETTERS:
            letter = letter.upper()
            if upper.startswith(letter, i):
                tokens.append(letter)
                i += len(letter)
                break
        else:
            tokens.append(upper[i])
            i += 1
    return tokens


def letter_rank(token: str) -> int:
    return LETTER_ORDER.get(token, UNKNOWN_RANK)


def collation_key(word: str) -> tuple[int, ...]:
    """Sort key; tuple comparison puts a prefix before its extensions."""
    return tuple(letter_rank(token) for token in tokenize_word(word))


def compare_words(a: str, b: str) -> int:
    """Returns -1, 0 or 1 comparing two words in Tsintskaro alphabetical order."""
    key_a, key_b = collation_key(a), collation_key(b)
    return (key_a > key_b) - (key_a < key_b)


def sort_entries(entries):
    """Stable sort of dictionary entries by headword."""
    return sorted(entries, key=lambda entry: collation_key(entry.word))
