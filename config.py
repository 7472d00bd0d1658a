import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file in development
load_dotenv()

logger = logging.getLogger(__name__)

# Check if we're in development mode
IS_DEVELOPMENT = os.environ.get("ENVIRONMENT", "development").lower() == "development"


def read_int_env(name: str, default: int, min_value: int | None = None) -> int:
    """Reads an integer from the environment, falling back to `default` on bad input."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"{name}={value!r} is not a valid integer, using {default}")
        return default
    if min_value is not None and number < min_value:
        return min_value
    return number


def read_list_env(name: str, default: list[str]) -> list[str]:
    value = os.environ.get(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


# Use TEST_BOT_TOKEN if in development and it exists, otherwise use BOT_TOKEN
if IS_DEVELOPMENT and os.environ.get("TEST_BOT_TOKEN"):
    BOT_TOKEN = os.environ.get("TEST_BOT_TOKEN")
else:
    BOT_TOKEN = os.environ.get("BOT_TOKEN")

OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o")

# Report is generated once this many messages are buffered in a chat
MESSAGE_THRESHOLD = read_int_env("MESSAGE_THRESHOLD", 100, min_value=1)

ADMIN_USERNAMES = set(read_list_env("ADMIN_USERNAMES", ["AAlxnv", "MEMazmanova"]))

# --- Dictionary sync ---
SHEET_ID = os.environ.get("SHEET_ID", "1DRomX8f2oxBIVpvygpySyGQ8UZf1UBXb7B8DYFfZSdg")

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# The store reads the first path, the sync writes all of them
DICTIONARY_PATHS = [
    path if os.path.isabs(path) else os.path.join(BASE_DIR, path)
    for path in read_list_env("DICTIONARY_PATHS", [os.path.join("assets", "dictionary.json")])
]

SYNC_TIME = os.environ.get("SYNC_TIME", "03:00")
SYNC_TIMEZONE = os.environ.get("SYNC_TIMEZONE", "Asia/Tbilisi")

HTTP_TIMEOUT = read_int_env("HTTP_TIMEOUT", 30, min_value=1)
