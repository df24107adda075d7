"""
AI assistant chat
"""
from telegram import Update
from telegram.ext import ContextTypes
from bigback.bot.keyboards.inline import InlineKeyboards
from bigback.bot.states import BotState
import logging

logger = logging.getLogger(__name__)

async def ai_chat_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Open the assistant"""
    query = update.callback_query
    await query.answer()

    assistant = context.bot_data['assistant']
    context.user_data['state'] = BotState.AI_CHAT

    await query.edit_message_text(
        text=f"💬 AI ASSISTANT\n\n{assistant.messages[0].content}",
        reply_markup=InlineKeyboards.back_to_menu()
    )

async def handle_ai_chat(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Forward a question to the assistant"""
    assistant = context.bot_data['assistant']
    assistant.goal = context.bot_data['goals'].user_goal

    await update.message.reply_text("🤖 Thinking...")

    reply = await assistant.send_message(update.message.text)
    if reply is None:
        return

    await update.message.reply_text(
        reply.content,
        reply_markup=InlineKeyboards.back_to_menu()
    )
