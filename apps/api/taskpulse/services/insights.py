from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Literal

from taskpulse.schemas.summaries import AccuracyStats, CelebrationTone, MonthlySummary
from taskpulse.schemas.tasks import Task
from taskpulse.services.metrics import round_half_up

SuggestionKind = Literal[
    "estimation", "productive_day", "streak", "breakdown", "completion"
]
ReminderAge = Literal["week", "two_weeks", "month"]

_MAX_SUGGESTIONS = 3

TASK_MILESTONES: tuple[int, ...] = (1, 10, 50, 100, 500, 1000)
STREAK_MILESTONES: tuple[int, ...] = (3, 7, 14, 30, 60)
ACCURACY_MILESTONES: tuple[int, ...] = (80, 90, 95)

_TASK_MILESTONE_TEXT: dict[int, str] = {
    1: "🎉 First task completed! This is the start of something great!",
    10: "🎯 10 tasks done! You're building momentum!",
    50: "🌟 50 tasks completed! Consistency is your superpower!",
    100: "💯 100 tasks! You've mastered the art of getting things done!",
    500: "🚀 500 tasks completed! You're a productivity champion!",
    1000: "🏆 1000 TASKS! This is legendary status!",
}
_STREAK_MILESTONE_TEXT: dict[int, str] = {
    3: "🔥 3-day streak! You're forming a habit!",
    7: "⭐ Week-long streak! Consistency is key!",
    14: "💪 2-week streak! You're unstoppable!",
    30: "🏅 30-day streak! This is incredible discipline!",
    60: "👑 60-day streak! You're a consistency master!",
}
_ACCURACY_MILESTONE_TEXT: dict[int, str] = {
    80: "🎓 80% estimation accuracy! You're learning your pace!",
    90: "🎯 90% accuracy! Your time estimates are spot-on!",
    95: "🏆 95% accuracy! You're a time estimation master!",
}

# Placeholders: {day}, {hours}.
_SUGGESTIONS: dict[CelebrationTone, dict[SuggestionKind, str]] = {
    "enthusiastic": {
        "estimation": "💡 Pro tip! Try tracking a few quick tasks first to calibrate your time sense - you'll nail those estimates in no time! 🎯",
        "productive_day": "💡 You rock on {day}s! Try scheduling your most important tasks then - ride that productivity wave! 🌊",
        "streak": "💡 Challenge yourself! Try completing just one small task daily - you'll build an awesome streak before you know it! 🔥",
        "breakdown": "💡 Those {hours}-hour tasks? Break 'em down! Smaller chunks = better estimates + more wins to celebrate! 🎉",
        "completion": "💡 Let's boost that completion rate! Try creating slightly fewer tasks so you can crush each one! 💪",
    },
    "gentle": {
        "estimation": "💡 Consider: starting with smaller tasks helps you learn your natural pace. No rush, just gentle awareness.",
        "productive_day": "💡 {day} seems to flow well for you. Perhaps schedule key tasks for that day when it feels right.",
        "streak": "💡 Small daily wins add up. One task per day, however tiny, creates gentle consistency.",
        "breakdown": "💡 Your tasks average {hours} hours. Smaller pieces might feel more manageable and easier to estimate.",
        "completion": "💡 You might enjoy creating fewer tasks at once. Less pressure, more completions, better flow.",
    },
    "professional": {
        "estimation": "💡 Recommendation: Begin with shorter tasks to establish baseline estimation patterns for improved accuracy.",
        "productive_day": "💡 Analysis shows peak productivity on {day}. Consider prioritizing critical tasks accordingly.",
        "streak": "💡 Strategy: Complete one task daily to establish consistent productivity patterns and extend streak duration.",
        "breakdown": "💡 Task decomposition recommended: Average duration of {hours} hours suggests opportunities for subdivision.",
        "completion": "💡 Recommendation: Reduce concurrent task volume to improve completion rate and maintain focus.",
    },
}

# Placeholders: {count}, {s} (plural suffix), {verb_be} / {verb_have} (agreeing verbs).
_REMINDERS: dict[CelebrationTone, dict[ReminderAge, str]] = {
    "enthusiastic": {
        "week": "💭 Hey! You have {count} task{s} from last week. Revisit when you're ready! 😊",
        "two_weeks": "🌟 {count} task{s} {verb_be} hanging around from 2 weeks ago. Still relevant? No pressure! 💫",
        "month": "📦 {count} task{s} {verb_have} been pending for a month. Maybe time to archive or revive? 🔄",
    },
    "gentle": {
        "week": "💭 {count} task{s} from last week {verb_be} resting. Revisit when it feels right.",
        "two_weeks": "🌸 {count} older task{s} {verb_have} been patient. Consider a gentle review.",
        "month": "📚 {count} task{s} from a month ago. Perhaps time to archive or refresh?",
    },
    "professional": {
        "week": "{count} task{s} from last week pending review at your convenience.",
        "two_weeks": "{count} task{s} older than 2 weeks require attention or archival.",
        "month": "{count} task{s} pending for 30+ days. Recommend review for relevance.",
    },
}

_DEFAULT_TONE: CelebrationTone = "enthusiastic"


def detect_milestones(
    summary: MonthlySummary,
    total_tasks_all_time: int,
    previous_milestones: Iterable[str] = (),
) -> list[str]:
    """Milestones reached and not yet recorded.

    ``previous_milestones`` holds keys such as ``task_10`` or ``streak_7``.
    """
    seen = set(previous_milestones)
    out: list[str] = []

    for threshold in TASK_MILESTONES:
        if total_tasks_all_time >= threshold and f"task_{threshold}" not in seen:
            out.append(_TASK_MILESTONE_TEXT[threshold])

    for threshold in STREAK_MILESTONES:
        if summary.longest_streak >= threshold and f"streak_{threshold}" not in seen:
            out.append(_STREAK_MILESTONE_TEXT[threshold])

    if summary.estimation_accuracy is not None:
        for threshold in ACCURACY_MILESTONES:
            if (
                summary.estimation_accuracy >= threshold
                and f"accuracy_{threshold}" not in seen
            ):
                out.append(_ACCURACY_MILESTONE_TEXT[threshold])

    return out


def generate_improvement_suggestions(
    summary: MonthlySummary,
    accuracy: AccuracyStats,
    *,
    tone: CelebrationTone | None = None,
    enable_insights: bool = True,
) -> list[str]:
    if not enable_insights:
        return []

    templates = _SUGGESTIONS[tone or _DEFAULT_TONE]
    out: list[str] = []

    if accuracy.accuracy is not None and accuracy.accuracy < 70:
        out.append(templates["estimation"])
    if summary.most_productive_day:
        out.append(templates["productive_day"].format(day=summary.most_productive_day))
    if summary.longest_streak < 7:
        out.append(templates["streak"])
    if summary.average_actual_minutes and summary.average_actual_minutes > 120:
        hours = round_half_up(summary.average_actual_minutes / 60)
        out.append(templates["breakdown"].format(hours=hours))
    if summary.completion_rate < 60:
        out.append(templates["completion"])

    return out[:_MAX_SUGGESTIONS]


def _days_old(task: Task, now: datetime) -> int:
    created = task.created_at
    if created.tzinfo is None and now.tzinfo is not None:
        created = created.replace(tzinfo=timezone.utc)
    elif created.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - created).days


def _reminder_age(days_old: int) -> ReminderAge | None:
    if days_old >= 30:
        return "month"
    if days_old >= 14:
        return "two_weeks"
    if days_old >= 7:
        return "week"
    return None


def generate_gentle_reminders(
    pending_tasks: Iterable[Task],
    *,
    now: datetime,
    tone: CelebrationTone | None = None,
    enable_insights: bool = True,
) -> list[str]:
    if not enable_insights:
        return []

    buckets: dict[ReminderAge, int] = {"week": 0, "two_weeks": 0, "month": 0}
    for task in pending_tasks:
        if task.is_completed:
            continue
        age = _reminder_age(_days_old(task, now))
        if age is not None:
            buckets[age] += 1

    templates = _REMINDERS[tone or _DEFAULT_TONE]
    out: list[str] = []
    for age, count in buckets.items():
        if count == 0:
            continue
        plural = count > 1
        out.append(
            templates[age].format(
                count=count,
                s="s" if plural else "",
                verb_be="are" if plural else "is",
                verb_have="have" if plural else "has",
            )
        )
    return out
