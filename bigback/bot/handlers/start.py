"""
/start, /help and the main menu
"""
from telegram import Update
from telegram.ext import ContextTypes
from bigback.bot.keyboards.inline import InlineKeyboards
from bigback.bot.states import BotState
import logging

logger = logging.getLogger(__name__)

async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/start: sign-up for a new installation, main menu otherwise"""
    user = update.effective_user
    context.user_data['state'] = BotState.IDLE

    store = context.bot_data['store']
    profile = store.load_profile()

    welcome_message = """💪 Welcome to Big Back Fitness Tracker!
Set your goals, log what you eat and let the AI keep you on track."""

    if not profile:
        await update.message.reply_text(
            welcome_message,
            reply_markup=InlineKeyboards.signup_start()
        )
    else:
        welcome_message += f"\n\n✅ Welcome back, {profile.username}!"
        await update.message.reply_text(
            welcome_message,
            reply_markup=InlineKeyboards.main_menu()
        )

    logger.info(f"User {user.id} ({user.username}) started the bot")

async def main_menu_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Back to the main menu"""
    query = update.callback_query
    await query.answer()

    context.user_data['state'] = BotState.IDLE

    await query.edit_message_text(
        text="🏠 Main menu\n\nChoose an action:",
        reply_markup=InlineKeyboards.main_menu()
    )

async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/help"""
    help_text = """ℹ️ HELP

🔹 Features:

🏠 Dashboard - today's calories and protein
📈 Progress - how close you are to your targets
🍽 Log food - name, amount and unit, the AI estimates the nutrients
📋 Food log - your entries, details and removal
🎯 Set goals - daily targets from your body data and target weight
💬 Ask AI - questions about nutrition and your goals

📸 Send a photo to log a scanned meal.

🔹 Commands:
/start - main menu
/help - this help
"""

    if update.message:
        await update.message.reply_text(help_text, reply_markup=InlineKeyboards.back_to_menu())
    else:
        query = update.callback_query
        await query.answer()
        await query.edit_message_text(text=help_text, reply_markup=InlineKeyboards.back_to_menu())
