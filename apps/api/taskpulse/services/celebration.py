from __future__ import annotations

from typing import Literal

from taskpulse.schemas.summaries import CelebrationTone

Tier = Literal[
    "outstanding",
    "outstanding_streak",
    "solid",
    "growing",
    "growing_streak",
    "progress",
    "fresh_start",
]

# A streak longer than this upgrades the top tier message.
LONG_STREAK_DAYS = 7
# A streak longer than this is mentioned in the middle tier.
BUILDING_STREAK_DAYS = 3

# One row per tone; None is the default wording. Placeholders: {rate}, {completed}, {streak}.
_TEMPLATES: dict[CelebrationTone | None, dict[Tier, str]] = {
    None: {
        "outstanding": "🌟 Outstanding month! You completed {rate}% of your tasks. Keep up the great work!",
        "outstanding_streak": "🌟 Outstanding month! You completed {rate}% of your tasks. Your {streak}-day streak shows amazing consistency!",
        "solid": "🎯 Solid progress! {completed} tasks completed with {rate}% completion rate.",
        "growing": "📚 You completed {completed} tasks this month! Keep tracking to find your rhythm.",
        "growing_streak": "📚 You completed {completed} tasks this month! Your {streak}-day streak shows you can build consistency.",
        "progress": "🌱 Every task completed is progress! You finished {completed} this month.",
        "fresh_start": "🚀 Ready to start fresh? Create some tasks and celebrate your first completion!",
    },
    "enthusiastic": {
        "outstanding": "🌟 Outstanding month! You absolutely crushed it with {rate}% completion! 🎉",
        "outstanding_streak": "🌟 Outstanding month! You absolutely crushed it with {rate}% completion! Your {streak}-day streak is 🔥!",
        "solid": "🎯 Fantastic work! {completed} tasks completed - you're on fire! 🔥",
        "growing": "📚 Great progress! You completed {completed} tasks and you're building momentum! 💪",
        "growing_streak": "📚 Great progress! You completed {completed} tasks and your {streak}-day streak proves you're building momentum! 💪",
        "progress": "🌟 {completed} tasks done this month! You're making progress and that's what counts! Keep going! 💪",
        "fresh_start": "🚀 A brand new month is waiting! Add a task and let's get that first win! 🎉",
    },
    "gentle": {
        "outstanding": "✨ What a lovely month! You completed {rate}% of your tasks with grace.",
        "outstanding_streak": "✨ What a lovely month! You completed {rate}% of your tasks with grace. Your {streak}-day consistency is beautiful.",
        "solid": "🌸 Nice work! {completed} tasks done - you're finding your rhythm.",
        "growing": "🌱 You're growing! {completed} tasks completed as you learn your patterns.",
        "growing_streak": "🌱 You're growing! {completed} tasks completed, with a {streak}-day stretch along the way.",
        "progress": "✨ {completed} tasks completed. Each one is a step forward. Keep moving at your own pace.",
        "fresh_start": "🌙 A quiet month so far. Whenever you're ready, one small task is a fine place to begin.",
    },
    "professional": {
        "outstanding": "Excellent performance this month: {rate}% task completion rate achieved.",
        "outstanding_streak": "Excellent performance this month: {rate}% task completion rate achieved. {streak}-day productivity streak maintained.",
        "solid": "Strong results: {completed} tasks completed with consistent execution.",
        "growing": "Progress noted: {completed} tasks completed as you refine your approach.",
        "growing_streak": "Progress noted: {completed} tasks completed, including a {streak}-day productivity streak.",
        "progress": "Monthly summary: {completed} tasks completed at {rate}% completion rate.",
        "fresh_start": "Monthly summary: no tasks completed yet. Create tasks to begin tracking progress.",
    },
}


def celebration_tier(
    completion_rate: int, completed_tasks: int, longest_streak: int
) -> Tier:
    if completion_rate > 80:
        if longest_streak > LONG_STREAK_DAYS:
            return "outstanding_streak"
        return "outstanding"
    if completion_rate > 60:
        return "solid"
    if completion_rate > 40:
        if longest_streak > BUILDING_STREAK_DAYS:
            return "growing_streak"
        return "growing"
    # A tiny rate can round down to 0 while something was still finished.
    if completion_rate > 0 or completed_tasks > 0:
        return "progress"
    return "fresh_start"


def generate_celebration_message(
    completion_rate: int,
    completed_tasks: int,
    longest_streak: int,
    tone: CelebrationTone | None = None,
) -> str:
    tier = celebration_tier(completion_rate, completed_tasks, longest_streak)
    template = _TEMPLATES[tone][tier]
    return template.format(
        rate=completion_rate, completed=completed_tasks, streak=longest_streak
    )


def available_tones() -> list[CelebrationTone]:
    return [tone for tone in _TEMPLATES if tone is not None]
