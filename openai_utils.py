import json
import logging
import re

import openai
from openai import AsyncOpenAI

import config
from prompts import DICTIONARY_SECTION, DISCUSSION_PROMPT, WORD_EXTRACTION_PROMPT

log = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    """Returns the shared async client, created on first use."""
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=config.OPENAI_API_KEY)
    return _client


def parse_json_response(content: str | None) -> dict | None:
    """Parses a JSON object from model output, tolerating ```json fences around it."""
    if not content:
        return None
    text = content.strip()

    fenced = re.search(r'```(?:json)?\s*({[\s\S]*?})\s*```', text)
    if fenced:
        text = fenced.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = re.search(r'{[\s\S]*}', text)
        if not match:
            log.error("No JSON-like structure found in response")
            return None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            log.error("Failed to extract valid JSON after regex attempt")
            return None

    return data if isinstance(data, dict) else None


async def _complete_json(prompt: str, client: AsyncOpenAI | None = None) -> dict | None:
    client = client or get_client()
    response = await client.chat.completions.create(
        model=config.OPENAI_MODEL,
        messages=[{"role": "user", "content": prompt}],
        response_format={"type": "json_object"},
        temperature=0.3,
    )
    return parse_json_response(response.choices[0].message.content)


async def analyze_messages(messages: list[str], dictionary_text: str = "", client: AsyncOpenAI | None = None) -> list[dict] | None:
    """
    Asks the model for non-Russian words in the chat messages.

    Args:
        messages: Message texts in arrival order.
        dictionary_text: Known dictionary rendered as "word = translation" lines.
        client: Optional client override.

    Returns:
        A list of {"word", "possibleTranslation", "context"} dicts, or None on error.
    """
    dictionary_section = DICTIONARY_SECTION.format(dictionary=dictionary_text) if dictionary_text else ""
    prompt = WORD_EXTRACTION_PROMPT.format(
        messages="\n---\n".join(messages),
        dictionary_section=dictionary_section,
    )

    try:
        data = await _complete_json(prompt, client)
    except openai.RateLimitError as e:
        log.warning("OpenAI rate limited: %s", e)
        return None
    except openai.OpenAIError as e:
        log.error("OpenAI word analysis failed: %s", e)
        return None

    if data is None:
        return None

    words = [w for w in data.get("words") or [] if isinstance(w, dict) and str(w.get("word", "")).strip()]
    log.info("OpenAI analysis done (%d words from %d messages)", len(words), len(messages))
    return words


async def process_discussion(messages: list[dict], client: AsyncOpenAI | None = None) -> dict | None:
    """Summarizes the discussion; returns {"discussionSummary": str} or None on error."""
    combined = "\n".join(f"{m.get('username') or 'anonymous'}: {m.get('text', '')}" for m in messages)

    try:
        data = await _complete_json(DISCUSSION_PROMPT.format(messages=combined), client)
    except openai.OpenAIError as e:
        log.error("OpenAI discussion summary failed: %s", e)
        return None

    if data is None:
        return None
    summary = data.get("discussionSummary") or ""
    return {"discussionSummary": str(summary).strip()}
