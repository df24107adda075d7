"""
Two-step sign-up: account information, then personal information
"""
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes
from bigback.bot.keyboards.inline import InlineKeyboards
from bigback.bot.states import BotState
from bigback.database.models import Gender, UserProfile
from bigback.utils.validators import DataValidator
import logging

logger = logging.getLogger(__name__)

async def _forget_message(update: Update):
    """Delete a message that carried a password"""
    try:
        await update.message.delete()
    except TelegramError as e:
        logger.warning(f"Could not delete password message: {e}")

async def signup_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Start sign-up"""
    query = update.callback_query
    await query.answer()

    context.user_data['signup'] = {}
    context.user_data['state'] = BotState.SIGNUP_USERNAME

    await query.edit_message_text("""✨ CREATE ACCOUNT · STEP 1 OF 2

Choose a username:""")

async def handle_signup_username(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, username, error = DataValidator.validate_username(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['signup']['username'] = username
    context.user_data['state'] = BotState.SIGNUP_EMAIL

    await update.message.reply_text("📧 Your email:")

async def handle_signup_email(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, email, error = DataValidator.validate_email(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['signup']['email'] = email
    context.user_data['state'] = BotState.SIGNUP_PASSWORD

    await update.message.reply_text("🔒 Choose a password (at least 6 characters):")

async def handle_signup_password(update: Update, context: ContextTypes.DEFAULT_TYPE):
    password = update.message.text
    await _forget_message(update)

    valid, password, error = DataValidator.validate_password(password)

    if not valid:
        await update.effective_chat.send_message(f"❌ {error}\n\nTry again:")
        return

    context.user_data['signup']['password'] = password
    context.user_data['state'] = BotState.SIGNUP_CONFIRM_PASSWORD

    await update.effective_chat.send_message("🔒 Repeat the password:")

async def handle_signup_confirm_password(update: Update, context: ContextTypes.DEFAULT_TYPE):
    confirm_password = update.message.text
    await _forget_message(update)

    valid, _, error = DataValidator.validate_password_confirmation(
        context.user_data['signup'].get('password', ''),
        confirm_password
    )

    if not valid:
        # start the password over
        context.user_data['signup'].pop('password', None)
        context.user_data['state'] = BotState.SIGNUP_PASSWORD
        await update.effective_chat.send_message(f"❌ {error}\n\nChoose a password again:")
        return

    context.user_data['signup']['confirm_password'] = confirm_password
    context.user_data['state'] = BotState.SIGNUP_TERMS

    await update.effective_chat.send_message(
        "📜 Do you accept the terms of use?",
        reply_markup=InlineKeyboards.terms_acceptance()
    )

async def handle_terms_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Terms accepted or declined; step 1 is validated as a whole here"""
    query = update.callback_query
    await query.answer()

    signup = context.user_data.get('signup', {})
    valid, error = DataValidator.validate_account(
        username=signup.get('username', ''),
        email=signup.get('email', ''),
        password=signup.get('password', ''),
        confirm_password=signup.get('confirm_password', ''),
        terms_accepted=query.data == "terms_accept"
    )

    if not valid:
        await query.edit_message_text(
            f"❌ {error}",
            reply_markup=InlineKeyboards.terms_acceptance()
        )
        return

    # password is only checked, never stored
    signup.pop('password', None)
    signup.pop('confirm_password', None)
    context.user_data['state'] = BotState.SIGNUP_UNITS

    await query.edit_message_text(
        "👤 STEP 2 OF 2 · PERSONAL INFORMATION\n\nWhich units do you use?",
        reply_markup=InlineKeyboards.unit_system()
    )

async def handle_signup_unit_system(update: Update, context: ContextTypes.DEFAULT_TYPE, metric: bool):
    query = update.callback_query
    await query.answer()

    context.user_data['signup']['metric'] = metric
    context.user_data['state'] = BotState.SIGNUP_AGE

    await query.edit_message_text("🎂 Your age (in years):")

async def handle_signup_age(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, age, error = DataValidator.validate_age(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['signup']['age'] = age
    context.user_data['state'] = BotState.SIGNUP_GENDER

    await update.message.reply_text(
        "👤 Your gender:",
        reply_markup=InlineKeyboards.gender_selection()
    )

async def handle_signup_gender(update: Update, context: ContextTypes.DEFAULT_TYPE, gender: Gender):
    query = update.callback_query
    await query.answer()

    context.user_data['signup']['gender'] = gender
    context.user_data['state'] = BotState.SIGNUP_HEIGHT

    if context.user_data['signup'].get('metric', True):
        await query.edit_message_text("📏 Your height (cm):")
    else:
        await query.edit_message_text("📏 Your height (feet and inches, e.g. 5'10):")

async def handle_signup_height(update: Update, context: ContextTypes.DEFAULT_TYPE):
    metric = context.user_data['signup'].get('metric', True)
    valid, height, error = DataValidator.validate_height(update.message.text, metric)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['signup']['height'] = height
    context.user_data['state'] = BotState.SIGNUP_WEIGHT

    await update.message.reply_text("⚖️ Your weight (kg):" if metric else "⚖️ Your weight (lb):")

async def handle_signup_weight(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Last field: save the profile and the starting goal"""
    signup = context.user_data['signup']
    valid, weight, error = DataValidator.validate_weight(update.message.text, signup.get('metric', True))

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    profile = UserProfile(
        username=signup['username'],
        email=signup['email'],
        gender=signup['gender'],
        age=signup['age']
    )

    store = context.bot_data['store']
    store.save_profile(profile)

    goal = context.bot_data['goals'].create_signup_goal(
        username=profile.username,
        height=signup['height'],
        weight=weight,
        age=profile.age,
        gender=profile.gender
    )

    assistant = context.bot_data['assistant']
    assistant.profile = profile
    assistant.goal = goal

    context.user_data['state'] = BotState.IDLE
    context.user_data.pop('signup', None)

    logger.info(f"Sign-up completed for {profile.username}")

    await update.message.reply_text(
        f"""✅ ACCOUNT CREATED!

Welcome, {profile.username}! 🎉

Your starting targets:
🔥 {goal.daily_calories} kcal
🥩 {goal.daily_protein:.0f} g protein
🍞 {goal.daily_carbs:.0f} g carbs
🥑 {goal.daily_fat:.0f} g fat

Set your goals to get targets calculated for you.""",
        reply_markup=InlineKeyboards.main_menu()
    )
