"""
Prompts for the Tsintskaro dictionary bot - word extraction and discussion summary
"""

WORD_EXTRACTION_PROMPT = """You are a linguistic analyst. Below are messages from a Telegram chat of people from Tsintskaro village (Georgia). They speak Russian but mix in words from their native language - an old Azerbaijani dialect written in Cyrillic script.

Your task:
1. Identify words that are NOT standard Russian - these are likely from their native Tsintskaro dialect
2. For each word found, try to guess a translation or meaning based on context (if impossible, say null)
3. Include a short context snippet showing how the word was used
{dictionary_section}
Messages:
{messages}

Respond in JSON format only:
{{
  "words": [
    {{
      "word": "the non-Russian word",
      "possibleTranslation": "translation or null",
      "context": "short phrase where it appeared"
    }}
  ]
}}

If no non-Russian words found, return {{"words": []}}"""

DICTIONARY_SECTION = """
Known Tsintskaro words (word = Russian translation). Use them to recognize dialect words, keep the word as written in the messages:
{dictionary}
"""

DISCUSSION_PROMPT = """Ниже сообщения из группового чата жителей села Цинцкаро. Каждое сообщение начинается с имени автора.

Напиши подробное описание обсуждения на русском языке:
- о чём говорили участники, какие темы поднимались и к чему пришли;
- кто что предлагал или спрашивал (используй имена авторов);
- объедини повторяющиеся сообщения и одинаковые мысли, не пересказывай одно и то же дважды;
- не выдумывай того, чего нет в сообщениях.

Сообщения:
{messages}

Ответь только JSON:
{{"discussionSummary": "подробное описание обсуждения"}}

Если обсуждать нечего, верни {{"discussionSummary": ""}}"""
