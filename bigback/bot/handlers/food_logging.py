"""
Food logging: manual entry, the camera placeholder and the log itself
"""
from telegram import Update
from telegram.ext import ContextTypes
from bigback.bot.keyboards.inline import InlineKeyboards
from bigback.bot.states import BotState
from bigback.database.models import FoodLogEntry
from bigback.utils.validators import DataValidator
import logging

logger = logging.getLogger(__name__)

FOOD_LOG_PAGE_SIZE = 10

def format_entry(entry: FoodLogEntry) -> str:
    return f"""🍽 {entry.food_name} · {entry.weight:.1f}{entry.unit} · {entry.timestamp:%H:%M}

🥩 Protein: {entry.macros.protein:.1f} g
🥑 Fat: {entry.macros.fat:.1f} g
🍞 Carbs: {entry.macros.carbs:.1f} g
🔥 Calories: {entry.macros.calories:.0f} kcal"""

def format_entry_details(entry: FoodLogEntry) -> str:
    micros = entry.micros
    return format_entry(entry) + f"""

🔬 Micronutrients:
• Sugars: {micros.total_sugars:.1f} g
• Fiber: {micros.fiber:.1f} g
• Calcium: {micros.calcium:.1f} mg
• Iron: {micros.iron:.1f} mg
• Sodium: {micros.sodium:.1f} mg
• Vitamin A: {micros.vitamin_a:.1f} IU
• Vitamin C: {micros.vitamin_c:.1f} mg
• Cholesterol: {micros.cholesterol:.1f} mg"""

async def log_food_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Start a food entry"""
    query = update.callback_query
    await query.answer()

    context.user_data['pending_food'] = {}
    context.user_data['state'] = BotState.FOOD_NAME

    await query.edit_message_text(
        text="""🍽 LOG FOOD

What did you eat? (e.g. chicken breast, banana)

📸 Or send a photo of your meal.""",
        reply_markup=InlineKeyboards.back_to_menu()
    )

async def handle_food_name(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, name, error = DataValidator.validate_food_name(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['pending_food'] = {'name': name}
    context.user_data['state'] = BotState.FOOD_WEIGHT

    await update.message.reply_text("⚖️ How much? Enter the amount (e.g. 150):")

async def handle_food_weight(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, weight, error = DataValidator.validate_food_weight(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['pending_food']['weight'] = weight
    context.user_data['state'] = BotState.FOOD_UNIT

    await update.message.reply_text(
        "📐 Unit:",
        reply_markup=InlineKeyboards.food_units()
    )

async def handle_food_unit_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Unit chosen: look the food up and log it"""
    query = update.callback_query
    await query.answer()

    pending_food = context.user_data.get('pending_food') or {}
    if context.user_data.get('state') != BotState.FOOD_UNIT or 'weight' not in pending_food:
        await query.edit_message_text("❌ Nothing to log, start again", reply_markup=InlineKeyboards.main_menu())
        return

    valid, unit, error = DataValidator.validate_unit(query.data.split('_', 1)[1])  # unit_oz -> oz
    if not valid:
        await query.edit_message_text(f"❌ {error}", reply_markup=InlineKeyboards.food_units())
        return

    await query.edit_message_text("⏳ Looking up nutrition...")

    nutrition = context.bot_data['nutrition']
    entry = await nutrition.add_food_entry(pending_food['name'], pending_food['weight'], unit)

    message = f"✅ LOGGED!\n\n{format_entry(entry)}"
    if nutrition.error_message:
        message += f"\n\n⚠️ {nutrition.error_message}. Showing estimated values."

    context.user_data['state'] = BotState.IDLE
    context.user_data.pop('pending_food', None)

    await query.edit_message_text(
        text=message,
        reply_markup=InlineKeyboards.food_entry_actions(entry.id)
    )

async def handle_photo_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Camera placeholder: every photo is logged as a generic scanned meal"""
    await update.message.reply_text("📸 Processing photo...")

    entry = await context.bot_data['nutrition'].scan_food()

    await update.message.reply_text(
        f"✅ Added {entry.food_name} ({entry.weight:.0f}{entry.unit})",
        reply_markup=InlineKeyboards.food_entry_actions(entry.id)
    )

async def food_log_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """List logged foods, newest first"""
    query = update.callback_query
    await query.answer()

    entries = context.bot_data['food_log'].entries[:FOOD_LOG_PAGE_SIZE]

    if not entries:
        await query.edit_message_text(
            "📋 Your food log is empty. Log your first meal!",
            reply_markup=InlineKeyboards.food_log_entries([])
        )
        return

    await query.edit_message_text(
        text="📋 FOOD LOG\n\nTap an entry for details:",
        reply_markup=InlineKeyboards.food_log_entries(entries)
    )

async def entry_details_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()

    entry_id = query.data.split('_', 1)[1]  # details_<id> -> <id>
    entry = context.bot_data['food_log'].get(entry_id)

    if not entry:
        await query.edit_message_text("❌ Entry not found", reply_markup=InlineKeyboards.back_to_menu())
        return

    await query.edit_message_text(
        text=format_entry_details(entry),
        reply_markup=InlineKeyboards.food_entry_actions(entry.id)
    )

async def remove_entry_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()

    entry_id = query.data.split('_', 1)[1]  # remove_<id> -> <id>

    if context.bot_data['nutrition'].remove_entry(entry_id):
        text = "🗑 Entry removed"
    else:
        text = "❌ Entry not found"

    await query.edit_message_text(text, reply_markup=InlineKeyboards.main_menu())
