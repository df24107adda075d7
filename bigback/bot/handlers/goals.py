"""
Goal setting and the current goal view
"""
from telegram import Update
from telegram.ext import ContextTypes
from bigback.bot.keyboards.inline import InlineKeyboards
from bigback.bot.states import BotState
from bigback.database.models import Gender, UserGoal
from bigback.utils.calculators import GoalCalculator
from bigback.utils.validators import DataValidator
import logging

logger = logging.getLogger(__name__)

def format_goal(goal: UserGoal) -> str:
    body_fat = f"\n📉 Body fat: {goal.body_fat:.1f}%" if goal.body_fat is not None else ""
    return f"""📏 Height: {goal.height:.0f} cm
⚖️ Weight: {goal.weight:.1f} kg
🎯 Target weight: {goal.target_weight:.1f} kg in {goal.timeframe} weeks
🎂 Age: {goal.age} · {goal.gender.value}{body_fat}

📊 Daily targets:
🔥 Calories: {goal.daily_calories} kcal
🥩 Protein: {goal.daily_protein:.0f} g
🍞 Carbs: {goal.daily_carbs:.0f} g
🥑 Fat: {goal.daily_fat:.0f} g"""

async def my_goals_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Show the current goal"""
    query = update.callback_query
    await query.answer()

    goal = context.bot_data['goals'].user_goal

    if not goal:
        await query.edit_message_text(
            "⚠️ You don't have goals yet. Set them first!",
            reply_markup=InlineKeyboards.goal_actions()
        )
        return

    await query.edit_message_text(
        text=f"🎯 YOUR GOALS\n\n{format_goal(goal)}",
        reply_markup=InlineKeyboards.goal_actions()
    )

async def set_goal_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Start goal setting"""
    query = update.callback_query
    await query.answer()

    context.user_data['goal_data'] = {}
    context.user_data['state'] = BotState.GOAL_UNITS

    await query.edit_message_text(
        "🎯 SET GOALS\n\nWhich units do you use?",
        reply_markup=InlineKeyboards.unit_system()
    )

async def handle_goal_unit_system(update: Update, context: ContextTypes.DEFAULT_TYPE, metric: bool):
    query = update.callback_query
    await query.answer()

    context.user_data['goal_data']['metric'] = metric
    context.user_data['state'] = BotState.GOAL_HEIGHT

    await query.edit_message_text("📏 Your height (cm):" if metric else "📏 Your height (feet and inches, e.g. 5'10):")

async def handle_goal_height(update: Update, context: ContextTypes.DEFAULT_TYPE):
    metric = context.user_data['goal_data'].get('metric', True)
    valid, height, error = DataValidator.validate_height(update.message.text, metric)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['goal_data']['height'] = height
    context.user_data['state'] = BotState.GOAL_WEIGHT

    await update.message.reply_text("⚖️ Current weight (kg):" if metric else "⚖️ Current weight (lb):")

async def handle_goal_weight(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, weight, error = DataValidator.validate_weight(
        update.message.text,
        context.user_data['goal_data'].get('metric', True)
    )

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['goal_data']['weight'] = weight
    context.user_data['state'] = BotState.GOAL_AGE

    await update.message.reply_text("🎂 Your age (18-100):")

async def handle_goal_age(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, age, error = DataValidator.validate_goal_age(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['goal_data']['age'] = age
    context.user_data['state'] = BotState.GOAL_GENDER

    await update.message.reply_text(
        "👤 Your gender:",
        reply_markup=InlineKeyboards.gender_selection()
    )

async def handle_goal_gender(update: Update, context: ContextTypes.DEFAULT_TYPE, gender: Gender):
    query = update.callback_query
    await query.answer()

    metric = context.user_data['goal_data'].get('metric', True)
    context.user_data['goal_data']['gender'] = gender
    context.user_data['state'] = BotState.GOAL_TARGET_WEIGHT

    await query.edit_message_text("🎯 Target weight (kg):" if metric else "🎯 Target weight (lb):")

async def handle_goal_target_weight(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, target_weight, error = DataValidator.validate_target_weight(
        update.message.text,
        context.user_data['goal_data'].get('metric', True)
    )

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['goal_data']['target_weight'] = target_weight
    context.user_data['state'] = BotState.GOAL_TIMEFRAME

    await update.message.reply_text("📅 In how many weeks (4-52)?")

async def handle_goal_timeframe(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, timeframe, error = DataValidator.validate_timeframe(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:")
        return

    context.user_data['goal_data']['timeframe'] = timeframe
    context.user_data['state'] = BotState.GOAL_BODY_FAT

    await update.message.reply_text(
        "📉 Body fat percentage (optional):",
        reply_markup=InlineKeyboards.body_fat_skip()
    )

async def handle_goal_body_fat(update: Update, context: ContextTypes.DEFAULT_TYPE):
    valid, body_fat, error = DataValidator.validate_body_fat(update.message.text)

    if not valid:
        await update.message.reply_text(f"❌ {error}\n\nTry again:", reply_markup=InlineKeyboards.body_fat_skip())
        return

    progress_message = await update.message.reply_text("⏳ Calculating your daily targets...")
    await _calculate_goals(progress_message, context, body_fat)

async def skip_body_fat_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()

    if context.user_data.get('state') != BotState.GOAL_BODY_FAT:
        return

    await query.edit_message_text("⏳ Calculating your daily targets...")
    await _calculate_goals(query.message, context, None)

async def _calculate_goals(message, context: ContextTypes.DEFAULT_TYPE, body_fat):
    """Run the goal engine and replace the progress message with the result"""
    goal_data = context.user_data['goal_data']
    engine = context.bot_data['goals']

    goal = await engine.calculate_goals(
        height=goal_data['height'],
        weight=goal_data['weight'],
        age=goal_data['age'],
        gender=goal_data['gender'],
        target_weight=goal_data['target_weight'],
        timeframe=goal_data['timeframe'],
        body_fat=body_fat
    )
    context.bot_data['assistant'].goal = goal

    result_message = f"✅ GOALS UPDATED!\n\n{format_goal(goal)}"

    if engine.error_message:
        fallback = engine.last_fallback
        result_message += "\n\n⚠️ The AI calculation was unavailable, targets come from our formula."
        if fallback:
            result_message += "\n\n" + GoalCalculator.get_methodology_explanation(
                bmr=fallback['bmr'],
                tdee=fallback['tdee'],
                daily_delta=fallback['daily_delta'],
                target_calories=fallback['target_calories']
            )

    context.user_data['state'] = BotState.IDLE
    context.user_data.pop('goal_data', None)

    await message.edit_text(
        text=result_message,
        reply_markup=InlineKeyboards.main_menu()
    )
