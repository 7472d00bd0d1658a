"""
Dictionary sync - pulls the Tsintskaro dictionary from Google Sheets and writes the JSON artifact.

Runs daily from the bot's job queue, on demand via /sync, or standalone:

    python dictionary_sync.py

The Google Sheet must be published to the web as CSV
(File > Share > Publish to web > Comma-separated values).
"""
import asyncio
import json
import logging
import os
import sys
from datetime import datetime

import aiofiles
import httpx
import pytz

import config
from alphabet_utils import sort_entries
from dictionary_store import DictionaryStore
from dictionary_utils import DictionaryEntry, convert_to_dictionary, merge_sheet_entries
from sheets_utils import SHEETS, SheetSource, build_csv_url, fetch_csv, parse_csv, spreadsheet_url

logger = logging.getLogger(__name__)

DICTIONARY_NAME = "Словарь цинцкарского языка"
DICTIONARY_NAME_EN = "Dictionary of Tsintskaro Language"


class PersistenceError(Exception):
    """Raised when the artifact cannot be written."""


def build_artifact(entries: list[DictionaryEntry], sheets: list[SheetSource], sheet_id: str) -> dict:
    return {
        "metadata": {
            "name": DICTIONARY_NAME,
            "nameEn": DICTIONARY_NAME_EN,
            "source": spreadsheet_url(sheet_id),
            "sheets": [sheet.name for sheet in sheets],
            "lastUpdated": datetime.now(pytz.utc).isoformat(),
            "totalEntries": len(entries),
        },
        "entries": [entry.to_dict() for entry in entries],
    }


async def write_artifact(artifact: dict, paths: list[str]) -> None:
    """
    Writes the artifact to every path, creating directories and overwriting existing files.

    Every path is first written to a sibling temp file; existing files are only
    replaced once all temp files are written, so a failure leaves them untouched.
    """
    payload = json.dumps(artifact, ensure_ascii=False, indent=2)
    staged = []
    try:
        for output_path in paths:
            tmp_path = f"{output_path}.tmp"
            try:
                os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
                async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                    staged.append((tmp_path, output_path))
                    await f.write(payload)
            except OSError as e:
                raise PersistenceError(f"Failed to write dictionary to {output_path}: {e}") from e

        for tmp_path, output_path in staged:
            try:
                os.replace(tmp_path, output_path)
            except OSError as e:
                raise PersistenceError(f"Failed to replace {output_path}: {e}") from e
            logger.info(f"Wrote dictionary to {output_path} ({artifact['metadata']['totalEntries']} entries)")
    finally:
        for tmp_path, _ in staged:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


async def build_dictionary(client: httpx.AsyncClient, sheets: list[SheetSource], sheet_id: str) -> list[DictionaryEntry]:
    """Fetches every sheet concurrently, then classifies, merges and sorts the entries."""

    async def fetch_sheet(sheet: SheetSource) -> str:
        logger.debug(f'Fetching "{sheet.name}"...')
        return await fetch_csv(client, build_csv_url(sheet, sheet_id))

    # gather keeps results in sheet order regardless of completion order
    csv_results = await asyncio.gather(*(fetch_sheet(sheet) for sheet in sheets))

    sheets_entries = []
    for sheet, csv_text in zip(sheets, csv_results):
        entries = convert_to_dictionary(parse_csv(csv_text))
        logger.info(f'Sheet "{sheet.name}": {len(entries)} entries')
        sheets_entries.append(entries)

    return sort_entries(merge_sheet_entries(sheets_entries))


async def sync_from_google_sheets(
    store: DictionaryStore | None,
    sheets: list[SheetSource] = SHEETS,
    sheet_id: str = config.SHEET_ID,
    output_paths: list[str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """
    Runs one full sync.

    Args:
        store: Store to reload after writing, or None when running standalone.
        sheets: Sources in precedence order.
        sheet_id: Google spreadsheet id.
        output_paths: Artifact locations; defaults to the configured ones.
        client: HTTP client to use; one is created when omitted.

    Returns:
        True on success. On failure the error is logged, nothing is written and
        the previous dictionary stays in effect.
    """
    if output_paths is None:
        output_paths = config.DICTIONARY_PATHS
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT) as own_client:
                dictionary = await build_dictionary(own_client, sheets, sheet_id)
        else:
            dictionary = await build_dictionary(client, sheets, sheet_id)

        artifact = build_artifact(dictionary, sheets, sheet_id)
        await write_artifact(artifact, output_paths)

        if store is not None:
            store.reload()
        logger.info("Dictionary sync completed successfully")
        return True
    except Exception as e:
        logger.error(f"Dictionary sync failed: {e}", exc_info=True)
        return False


async def scheduled_sync(context) -> None:
    """Job queue callback for the daily sync."""
    logger.info("Running daily dictionary sync from Google Sheets")
    await sync_from_google_sheets(context.bot_data.get("dictionary_store"))


async def main() -> int:
    logger.info("Fetching dictionary from Google Sheets...")
    ok = await sync_from_google_sheets(None)
    return 0 if ok else 1


if __name__ == "__main__":
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
    )
    sys.exit(asyncio.run(main()))
