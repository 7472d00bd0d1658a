"""
Google Sheets ingestion for the Tsintskaro dictionary - fetches published CSV tabs and splits them into rows
"""
import logging
from dataclasses import dataclass
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

# Max redirect hops followed for a single sheet fetch
MAX_REDIRECTS = 5


@dataclass(frozen=True)
class SheetSource:
    name: str
    label: str
    gid: str | None = None


# Order matters: the first sheet wins when the same word appears in several sheets
SHEETS = [
    SheetSource(name="Эталонный словарь", label="Standard Dictionary"),
    SheetSource(name="Рабочий словарь", label="Working Dictionary", gid="1176528049"),
]


class FetchError(Exception):
    """Raised when a sheet cannot be downloaded."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def spreadsheet_url(sheet_id: str) -> str:
    return f"https://docs.google.com/spreadsheets/d/{sheet_id}"


def build_csv_url(sheet: SheetSource, sheet_id: str) -> str:
    """Returns the CSV export URL for a sheet, by numeric tab id if known, otherwise by tab name."""
    if sheet.gid:
        return f"{spreadsheet_url(sheet_id)}/export?format=csv&gid={sheet.gid}"
    return f"{spreadsheet_url(sheet_id)}/gviz/tq?tqx=out:csv&sheet={quote(sheet.name, safe='')}"


async def fetch_csv(client: httpx.AsyncClient, url: str, max_redirects: int = MAX_REDIRECTS) -> str:
    """
    Downloads CSV text, following redirects manually.

    Args:
        client: HTTP client, expected not to follow redirects on its own.
        url: Export URL of the sheet.
        max_redirects: Number of 3xx hops allowed before giving up.

    Returns:
        The response body decoded as UTF-8.

    Raises:
        FetchError: on network failure, a non-200 final status or a redirect loop.
    """
    for _ in range(max_redirects + 1):
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        location = response.headers.get("location")
        if 300 <= response.status_code < 400 and location:
            url = str(response.url.join(location))
            logger.debug(f"Following redirect to {url}")
            continue

        if response.status_code != 200:
            raise FetchError(f"Failed to fetch: HTTP {response.status_code}", status=response.status_code)

        response.encoding = "utf-8"
        return response.text

    raise FetchError(f"Too many redirects (more than {max_redirects})")


def parse_csv(csv_content: str) -> list[list[str]]:
    """Splits CSV text into rows of trimmed cells. Quoted fields may not span lines."""
    rows = []
    for line in csv_content.split("\n"):
        if not line.strip():
            continue

        row = []
        current_field = []
        in_quotes = False
        i = 0
        while i < len(line):
            char = line[i]
            if char == '"':
                if in_quotes and line[i + 1:i + 2] == '"':
                    # Escaped quote inside a quoted field
                    current_field.append('"')
                    i += 1
                else:
                    in_quotes = not in_quotes
            elif char == "," and not in_quotes:
                row.append("".join(current_field).strip())
                current_field = []
            else:
                current_field.append(char)
            i += 1

        row.append("".join(current_field).strip())
        rows.append(row)
    return rows
