import asyncio
import logging
import sys
from datetime import time
from functools import wraps

import pytz
from telegram import BotCommand, Update
from telegram.constants import ChatType, ParseMode
from telegram.ext import Application, CallbackContext, CommandHandler, MessageHandler, filters

import config
from buffer_utils import ChatBuffer
from dictionary_store import DictionaryStore
from dictionary_sync import scheduled_sync, sync_from_google_sheets
from locales import get_string
from openai_utils import analyze_messages, process_discussion
from report_utils import append_discussion, chunk_string, format_report, pluralize

# Enable logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
)
logger = logging.getLogger(__name__)

# --- Helper Functions ---

def is_private_chat(update: Update) -> bool:
    return update.effective_chat is not None and update.effective_chat.type == ChatType.PRIVATE


def is_admin(update: Update) -> bool:
    user = update.effective_user
    return user is not None and user.username in config.ADMIN_USERNAMES


def admin_group_command(func):
    """Lets a command through only for admins and only in group chats."""
    @wraps(func)
    async def command_func(update: Update, context: CallbackContext, *args, **kwargs):
        message = update.effective_message
        if not message:
            return
        if not is_admin(update):
            await message.reply_text(get_string('admin_only'))
            return
        if is_private_chat(update):
            await message.reply_text(get_string('group_only'))
            return
        return await func(update, context, *args, **kwargs)
    return command_func


def parse_sync_time(value: str, tz_name: str) -> time:
    """Parses "HH:MM" into a timezone-aware time, defaulting to 03:00."""
    tz = pytz.timezone(tz_name)
    try:
        hour, minute = (int(part) for part in value.split(":", 1))
        return time(hour=hour, minute=minute, tzinfo=tz)
    except ValueError:
        logger.warning(f"Invalid SYNC_TIME {value!r}, using 03:00")
        return time(hour=3, minute=0, tzinfo=tz)

# --- Report ---

async def generate_report(update: Update, context: CallbackContext) -> None:
    chat_id = update.effective_chat.id
    message = update.effective_message
    buffer: ChatBuffer = context.bot_data['chat_buffer']
    store: DictionaryStore = context.bot_data['dictionary_store']

    messages_text = buffer.get_messages_text(chat_id)
    messages = buffer.get_messages(chat_id)

    if not messages_text:
        await message.reply_text(get_string('no_messages'))
        return

    count = len(messages_text)
    noun = pluralize(count, *get_string('message_forms'))
    status_msg = await message.reply_text(get_string('analyzing').format(count=count, noun=noun))

    try:
        words, discussion = await asyncio.gather(
            analyze_messages(messages_text, store.get_formatted_for_prompt()),
            process_discussion(messages),
        )
        if words is None:
            raise RuntimeError("word analysis failed")

        await status_msg.delete()

        report = format_report(words, store)
        if discussion:
            report = append_discussion(report, discussion.get('discussionSummary', ''))

        chunks = chunk_string(report)
        for i, chunk in enumerate(chunks):
            if i == len(chunks) - 1:
                chunk += get_string('report_done')
            await context.bot.send_message(chat_id, chunk, parse_mode=ParseMode.HTML)

        buffer.clear(chat_id)
        logger.info(f"[Chat {chat_id}] Report sent ({len(words)} words, {len(chunks)} messages)")
    except Exception as e:
        logger.error(f"[Chat {chat_id}] Report error: {e}", exc_info=True)
        await context.bot.send_message(chat_id, get_string('report_error'))

# --- Handlers ---

@admin_group_command
async def start(update: Update, context: CallbackContext) -> None:
    logger.info("Received /start command")
    await update.effective_message.reply_text(get_string('start'))


@admin_group_command
async def status_command(update: Update, context: CallbackContext) -> None:
    chat_id = update.effective_chat.id
    logger.info(f"[Chat {chat_id}] Received /status command")
    count = context.bot_data['chat_buffer'].get_count(chat_id)
    await update.effective_message.reply_text(
        get_string('status').format(count=count, threshold=config.MESSAGE_THRESHOLD)
    )


@admin_group_command
async def report_command(update: Update, context: CallbackContext) -> None:
    logger.info(f"[Chat {update.effective_chat.id}] Received /report command")
    await generate_report(update, context)


@admin_group_command
async def clear_command(update: Update, context: CallbackContext) -> None:
    context.bot_data['chat_buffer'].clear(update.effective_chat.id)
    await update.effective_message.reply_text(get_string('buffer_cleared'))


@admin_group_command
async def sync_command(update: Update, context: CallbackContext) -> None:
    """Runs the dictionary sync on demand and reports the outcome."""
    logger.info(f"[Chat {update.effective_chat.id}] Received /sync command")
    store: DictionaryStore = context.bot_data['dictionary_store']
    await update.effective_message.reply_text(get_string('sync_started'))
    if await sync_from_google_sheets(store):
        count = len(store)
        noun = pluralize(count, *get_string('word_forms'))
        await update.effective_message.reply_text(get_string('sync_done').format(count=count, noun=noun))
    else:
        await update.effective_message.reply_text(get_string('sync_failed'))


async def handle_text_message(update: Update, context: CallbackContext) -> None:
    """Buffers group messages and triggers a report once the threshold is reached."""
    message = update.effective_message
    user = update.effective_user
    if not message or not message.text or is_private_chat(update):
        return
    if user and user.is_bot:
        return

    chat_id = update.effective_chat.id
    username = (user.username if user else None) or "anonymous"
    count = context.bot_data['chat_buffer'].add_message(chat_id, message.text, username)
    logger.info(f"[Chat {chat_id}] Message count: {count}/{config.MESSAGE_THRESHOLD}")

    if count >= config.MESSAGE_THRESHOLD:
        await generate_report(update, context)


async def post_init(application: Application) -> None:
    """Register commands, load the dictionary and schedule the daily sync."""
    await application.bot.set_my_commands([
        BotCommand("start", get_string('cmd_start')),
        BotCommand("report", get_string('cmd_report')),
        BotCommand("status", get_string('cmd_status')),
        BotCommand("clear", get_string('cmd_clear')),
        BotCommand("sync", get_string('cmd_sync')),
    ])
    logger.info("Bot commands registered")

    application.bot_data['dictionary_store'].reload()

    sync_time = parse_sync_time(config.SYNC_TIME, config.SYNC_TIMEZONE)
    application.job_queue.run_daily(scheduled_sync, time=sync_time, name="dictionary_sync")
    logger.info(f"Daily dictionary sync scheduled at {config.SYNC_TIME} {config.SYNC_TIMEZONE}")


def main() -> None:
    """Start the bot."""
    if not config.BOT_TOKEN:
        logger.error("BOT_TOKEN environment variable not set.")
        sys.exit(1)
    if not config.OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY environment variable not set.")
        sys.exit(1)

    application = (
        Application.builder()
        .token(config.BOT_TOKEN)
        .post_init(post_init)
        .build()
    )
    application.bot_data['chat_buffer'] = ChatBuffer()
    application.bot_data['dictionary_store'] = DictionaryStore(config.DICTIONARY_PATHS)
    logger.info(f"Bot initialized with threshold: {config.MESSAGE_THRESHOLD}")

    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("status", status_command))
    application.add_handler(CommandHandler("report", report_command))
    application.add_handler(CommandHandler("clear", clear_command))
    application.add_handler(CommandHandler("sync", sync_command))

    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND & filters.ChatType.GROUPS, handle_text_message))

    logger.info("Starting bot polling...")
    application.run_polling()

if __name__ == "__main__":
    main()
