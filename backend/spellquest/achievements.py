from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


STREAK_THRESHOLDS = [(3, "week_streak_3"), (7, "week_streak_7")]
WORD_THRESHOLDS = [(25, "words_25"), (50, "words_50"), (100, "words_100")]
WRITING_THRESHOLDS = [(1, "writing_project_1"), (5, "writing_project_5")]
ACCURACY_THRESHOLD = 90
MINUTES_THRESHOLD = 600


@dataclass
class AchievementContext:
    """Progress snapshot taken right after a mutating action."""
    current_streak: int = 0
    words_mastered: int = 0
    spelling_accuracy: float = 0.0
    total_study_minutes: int = 0
    completed_projects: int = 0
    first_activity: bool = False
    diagnostic_completed: bool = False
    exercise_accuracy: Optional[float] = None
    passed_phase: Optional[int] = None


def phase_achievement(phase: int) -> str:
    return f"phase_{phase}_complete"


def evaluate(ctx: AchievementContext) -> List[str]:
    earned: List[str] = []
    if ctx.first_activity:
        earned.append("first_session")
    earned.extend(aid for minimum, aid in STREAK_THRESHOLDS if ctx.current_streak >= minimum)
    earned.extend(aid for minimum, aid in WORD_THRESHOLDS if ctx.words_mastered >= minimum)
    if ctx.spelling_accuracy >= ACCURACY_THRESHOLD:
        earned.append("accuracy_90")
    if ctx.total_study_minutes >= MINUTES_THRESHOLD:
        earned.append("hours_10")
    if ctx.exercise_accuracy is not None and ctx.exercise_accuracy >= 100:
        earned.append("perfect_score")
    earned.extend(aid for minimum, aid in WRITING_THRESHOLDS if ctx.completed_projects >= minimum)
    if ctx.diagnostic_completed:
        earned.append("diagnostic_complete")
    if ctx.passed_phase is not None:
        earned.append(phase_achievement(ctx.passed_phase))
    return earned
