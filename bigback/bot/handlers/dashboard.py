"""
Dashboard and progress views for today
"""
from datetime import date
from telegram import Update
from telegram.ext import ContextTypes
from bigback.bot.keyboards.inline import InlineKeyboards
from bigback.utils.progress import ProgressReport
import logging

logger = logging.getLogger(__name__)

BAND_ICONS = {"low": "⚪", "mid": "🟡", "high": "🟢"}

async def dashboard_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Today's calories and protein against the goal"""
    query = update.callback_query
    await query.answer()

    today = date.today()
    summary = context.bot_data['food_log'].summary_for_date(today)
    goal = context.bot_data['goals'].user_goal
    profile = context.bot_data['store'].load_profile()

    name = profile.username if profile else "there"
    message = f"👋 Hi, {name}!\n📅 {today:%A, %B %d, %Y}\n\n"

    if goal:
        remaining_calories = goal.daily_calories - summary['calories']
        remaining_protein = goal.daily_protein - summary['protein']

        message += f"""🔥 Calories: {summary['calories']:.0f} / {goal.daily_calories} kcal
🥩 Protein: {summary['protein']:.0f} / {goal.daily_protein:.0f} g

Remaining:
🔥 {remaining_calories:.0f} kcal
🥩 {remaining_protein:.0f} g

📝 Entries today: {summary['count']}"""
    else:
        message += f"""🔥 Calories: {summary['calories']:.0f} kcal
🥩 Protein: {summary['protein']:.0f} g

⚠️ Set your goals to see targets."""

    await query.edit_message_text(
        text=message,
        reply_markup=InlineKeyboards.dashboard_actions()
    )

async def progress_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Progress bars and feedback for calories and protein"""
    query = update.callback_query
    await query.answer()

    goal = context.bot_data['goals'].user_goal

    if not goal:
        await query.edit_message_text(
            "⚠️ Set your nutrition goals to track your progress",
            reply_markup=InlineKeyboards.back_to_menu()
        )
        return

    summary = context.bot_data['food_log'].summary_for_date(date.today())

    calorie_ratio = ProgressReport.ratio(summary['calories'], goal.daily_calories)
    protein_ratio = ProgressReport.ratio(summary['protein'], goal.daily_protein)
    calorie_progress = ProgressReport.goal_progress(summary['calories'], goal.daily_calories)
    protein_progress = ProgressReport.goal_progress(summary['protein'], goal.daily_protein)
    average = (calorie_progress + protein_progress) / 2

    calorie_icon = BAND_ICONS[ProgressReport.progress_band(calorie_progress)]
    protein_icon = BAND_ICONS[ProgressReport.progress_band(protein_progress)]

    message = f"""📈 PROGRESS

🔥 CALORIES {calorie_icon} {int(calorie_progress * 100)}%
{ProgressReport.progress_bar(calorie_progress)}
{summary['calories']:.0f} / {goal.daily_calories} kcal
{ProgressReport.calories_feedback(calorie_ratio)}

🥩 PROTEIN {protein_icon} {int(protein_progress * 100)}%
{ProgressReport.progress_bar(protein_progress)}
{summary['protein']:.0f} / {goal.daily_protein:.0f} g
{ProgressReport.protein_feedback(protein_ratio)}

🏆 {ProgressReport.motivational_message(average)}"""

    await query.edit_message_text(
        text=message,
        reply_markup=InlineKeyboards.dashboard_actions()
    )
