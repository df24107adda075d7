"""
Big Back Fitness Tracker bot entry point
"""
import logging
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
    MessageHandler,
    filters,
    ContextTypes
)

# Services
from bigback.config import OPENAI_API_KEY, PREFERENCES_PATH, TELEGRAM_BOT_TOKEN
from bigback.database.food_log import FoodLog
from bigback.database.models import Gender
from bigback.database.preferences import PreferenceStore
from bigback.services.assistant import ChatAssistant
from bigback.services.goal_engine import GoalEngine
from bigback.services.nutrition_service import NutritionLookup
from bigback.services.openai_service import OpenAIService

# Handlers
from bigback.bot.handlers.start import start_command, main_menu_callback, help_command
from bigback.bot.handlers.signup import (
    signup_callback,
    handle_signup_username,
    handle_signup_email,
    handle_signup_password,
    handle_signup_confirm_password,
    handle_terms_callback,
    handle_signup_unit_system,
    handle_signup_age,
    handle_signup_gender,
    handle_signup_height,
    handle_signup_weight
)
from bigback.bot.handlers.goals import (
    my_goals_callback,
    set_goal_callback,
    handle_goal_unit_system,
    handle_goal_height,
    handle_goal_weight,
    handle_goal_age,
    handle_goal_gender,
    handle_goal_target_weight,
    handle_goal_timeframe,
    handle_goal_body_fat,
    skip_body_fat_callback
)
from bigback.bot.handlers.food_logging import (
    log_food_callback,
    handle_food_name,
    handle_food_weight,
    handle_food_unit_callback,
    handle_photo_message,
    food_log_callback,
    entry_details_callback,
    remove_entry_callback
)
from bigback.bot.handlers.dashboard import dashboard_callback, progress_callback
from bigback.bot.handlers.chat import ai_chat_callback, handle_ai_chat
from bigback.bot.keyboards.inline import InlineKeyboards
from bigback.bot.states import BotState

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)
logger = logging.getLogger(__name__)

TEXT_HANDLERS = {
    BotState.SIGNUP_USERNAME: handle_signup_username,
    BotState.SIGNUP_EMAIL: handle_signup_email,
    BotState.SIGNUP_PASSWORD: handle_signup_password,
    BotState.SIGNUP_CONFIRM_PASSWORD: handle_signup_confirm_password,
    BotState.SIGNUP_AGE: handle_signup_age,
    BotState.SIGNUP_HEIGHT: handle_signup_height,
    BotState.SIGNUP_WEIGHT: handle_signup_weight,
    BotState.GOAL_HEIGHT: handle_goal_height,
    BotState.GOAL_WEIGHT: handle_goal_weight,
    BotState.GOAL_AGE: handle_goal_age,
    BotState.GOAL_TARGET_WEIGHT: handle_goal_target_weight,
    BotState.GOAL_TIMEFRAME: handle_goal_timeframe,
    BotState.GOAL_BODY_FAT: handle_goal_body_fat,
    BotState.FOOD_NAME: handle_food_name,
    BotState.FOOD_WEIGHT: handle_food_weight,
    BotState.AI_CHAT: handle_ai_chat,
}

async def route_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Route text by conversation state; idle text goes to the assistant"""
    state = context.user_data.get('state', BotState.IDLE)
    handler = TEXT_HANDLERS.get(state, handle_ai_chat)
    await handler(update, context)

async def route_unit_system_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    metric = update.callback_query.data == "system_metric"
    state = context.user_data.get('state')

    if state == BotState.SIGNUP_UNITS:
        await handle_signup_unit_system(update, context, metric)
    elif state == BotState.GOAL_UNITS:
        await handle_goal_unit_system(update, context, metric)
    else:
        await update.callback_query.answer()

async def route_gender_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    gender = Gender(update.callback_query.data.split('_', 1)[1])  # gender_Male -> Male
    state = context.user_data.get('state')

    if state == BotState.SIGNUP_GENDER:
        await handle_signup_gender(update, context, gender)
    elif state == BotState.GOAL_GENDER:
        await handle_goal_gender(update, context, gender)
    else:
        await update.callback_query.answer()

async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    """Error handler"""
    logger.error(f"Update {update} caused error {context.error}")

    if isinstance(update, Update) and update.effective_message:
        await update.effective_message.reply_text(
            "❌ Something went wrong. Try again or send /start",
            reply_markup=InlineKeyboards.back_to_menu()
        )

def build_application(token: str) -> Application:
    """Wire services and handlers into a bot application"""
    store = PreferenceStore(PREFERENCES_PATH)
    openai_service = OpenAIService(OPENAI_API_KEY)
    food_log = FoodLog()
    goals = GoalEngine(openai_service, store)

    application = Application.builder().token(token).build()

    # Services shared by all handlers
    application.bot_data['store'] = store
    application.bot_data['openai'] = openai_service
    application.bot_data['food_log'] = food_log
    application.bot_data['goals'] = goals
    application.bot_data['nutrition'] = NutritionLookup(openai_service, food_log)
    application.bot_data['assistant'] = ChatAssistant(
        openai_service,
        food_log,
        profile=store.load_profile(),
        goal=goals.user_goal
    )

    # Commands
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))

    # Navigation
    application.add_handler(CallbackQueryHandler(main_menu_callback, pattern="^main_menu$"))
    application.add_handler(CallbackQueryHandler(help_command, pattern="^help$"))

    # Sign-up
    application.add_handler(CallbackQueryHandler(signup_callback, pattern="^signup$"))
    application.add_handler(CallbackQueryHandler(handle_terms_callback, pattern="^terms_"))
    application.add_handler(CallbackQueryHandler(route_unit_system_callback, pattern="^system_"))
    application.add_handler(CallbackQueryHandler(route_gender_callback, pattern="^gender_"))

    # Goals
    application.add_handler(CallbackQueryHandler(my_goals_callback, pattern="^my_goals$"))
    application.add_handler(CallbackQueryHandler(set_goal_callback, pattern="^set_goal$"))
    application.add_handler(CallbackQueryHandler(skip_body_fat_callback, pattern="^bodyfat_skip$"))

    # Food log
    application.add_handler(CallbackQueryHandler(log_food_callback, pattern="^log_food$"))
    application.add_handler(CallbackQueryHandler(handle_food_unit_callback, pattern="^unit_"))
    application.add_handler(CallbackQueryHandler(food_log_callback, pattern="^food_log$"))
    application.add_handler(CallbackQueryHandler(entry_details_callback, pattern="^details_"))
    application.add_handler(CallbackQueryHandler(remove_entry_callback, pattern="^remove_"))

    # Dashboard
    application.add_handler(CallbackQueryHandler(dashboard_callback, pattern="^dashboard$"))
    application.add_handler(CallbackQueryHandler(progress_callback, pattern="^progress$"))

    # Assistant
    application.add_handler(CallbackQueryHandler(ai_chat_callback, pattern="^ai_chat$"))

    # Messages
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, route_text_message))
    application.add_handler(MessageHandler(filters.PHOTO, handle_photo_message))

    application.add_error_handler(error_handler)
    return application

def main():
    """Start the bot"""
    logger.info("🚀 Starting bot...")

    if not TELEGRAM_BOT_TOKEN:
        logger.error("❌ TELEGRAM_BOT_TOKEN is not set!")
        return

    application = build_application(TELEGRAM_BOT_TOKEN)

    logger.info("✅ Bot is running")
    application.run_polling(allowed_updates=Update.ALL_TYPES)

if __name__ == "__main__":
    main()
