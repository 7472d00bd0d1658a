STRINGS = {
    'ru': {
        'start': "გამარჯობა! Я бот-словарь Цинцкаро.\n\n"
                 "Я собираю сообщения и нахожу нерусские слова для словаря.\n\n"
                 "Команды:\n"
                 "/report - Создать отчёт сейчас\n"
                 "/status - Показать количество собранных сообщений\n"
                 "/clear - Очистить буфер без отчёта\n"
                 "/sync - Обновить словарь из таблицы",
        'admin_only': "Команды боту доступны только администраторам",
        'group_only': "Этот бот работает только в групповых чатах.",
        'status': "📊 Собрано сообщений: {count}/{threshold}\nИспользуйте /report для создания отчёта.",
        'buffer_cleared': "🗑 Буфер очищен.",
        'no_messages': "Сообщений пока нет.",
        'analyzing': "🔍 Анализирую {count} {noun}...",
        'message_forms': ("сообщение", "сообщения", "сообщений"),
        'report_done': "\n\n✅ Отчёт готов, буфер очищен.",
        'report_error': "❌ Ошибка при формировании отчёта. Попробуйте ещё раз.",
        'sync_started': "🔄 Обновляю словарь из таблицы...",
        'sync_done': "✅ Словарь обновлён: {count} {noun}.",
        'word_forms': ("слово", "слова", "слов"),
        'sync_failed': "❌ Не удалось обновить словарь. Используется предыдущая версия.",
        'cmd_start': "Начать работу",
        'cmd_report': "Создать отчёт сейчас",
        'cmd_status': "Показать количество сообщений",
        'cmd_clear': "Очистить буфер без отчёта",
        'cmd_sync': "Обновить словарь",
    },
}

DEFAULT_LANGUAGE = 'ru'


def get_string(key: str, language: str = DEFAULT_LANGUAGE):
    """Returns a string for the specified language."""
    if language not in STRINGS:
        language = DEFAULT_LANGUAGE

    return STRINGS[language].get(key, f"[{key}_{language}?]")
