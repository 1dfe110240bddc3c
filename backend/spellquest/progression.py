"""Adaptive progression rules: diagnostic scoring, streaks and checkpoints.

Everything here is pure: callers pass explicit snapshots (and a random
source where content is generated) and persist the returned values.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date, datetime
from fractions import Fraction
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .curriculum import DIAGNOSTIC_QUESTIONS, MAX_PHASE, words_for_phase


RETAKE_POLICIES = ("overwrite", "keep_highest")

# (minimum total score, recommended phase), checked top-down
PHASE_THRESHOLDS = [(85, 4), (70, 3), (55, 2), (40, 1)]

CHECKPOINT_POINTS = 5
CHECKPOINT_TYPES = ("spelling", "multiple_choice", "fill_blank")


def normalize_answer(value: Any) -> str:
    return str(value if value is not None else "").strip().lower()


def is_correct(answer: Any, expected: Any) -> bool:
    given = normalize_answer(answer)
    if isinstance(expected, (list, tuple)):
        return any(given == normalize_answer(option) for option in expected)
    return given == normalize_answer(expected)


def _lookup(answers: Mapping[Any, Any], question_id: Any) -> Any:
    # JSON bodies carry string keys, Python callers may use ints
    if question_id in answers:
        return answers[question_id]
    return answers.get(str(question_id))


# ---- Diagnostic ----

@dataclass
class DiagnosticScore:
    total_score: int
    part_scores: Dict[str, int]
    recommended_phase: int
    error_patterns: Dict[str, int] = field(default_factory=dict)


def recommend_phase(total_score: int) -> int:
    for minimum, phase in PHASE_THRESHOLDS:
        if total_score >= minimum:
            return phase
    return 1


def score_diagnostic(answers: Mapping[Any, Any], bank: Sequence[Mapping[str, Any]] = DIAGNOSTIC_QUESTIONS) -> DiagnosticScore:
    part_scores: Dict[str, int] = {"A": 0, "B": 0, "C": 0, "D": 0}
    error_patterns: Dict[str, int] = {}
    total = 0
    for question in bank:
        if is_correct(_lookup(answers, question["id"]), question["answer"]):
            points = int(question.get("points", 0))
            total += points
            part = question.get("part")
            if part in part_scores:
                part_scores[part] += points
        else:
            category = question.get("category") or "unknown"
            error_patterns[category] = error_patterns.get(category, 0) + 1
    return DiagnosticScore(
        total_score=total,
        part_scores=part_scores,
        recommended_phase=recommend_phase(total),
        error_patterns=error_patterns,
    )


def phase_after_diagnostic(current_phase: Optional[int], recommended_phase: int, policy: str) -> int:
    """Phase a learner lands on after submitting a diagnostic.

    ``overwrite`` always moves to the recommendation (a fresh start on every
    retake); ``keep_highest`` never lowers the phase already reached.
    """
    if policy not in RETAKE_POLICIES:
        raise ValueError(f"unknown diagnostic retake policy: {policy}")
    if policy == "overwrite" or not current_phase:
        return recommended_phase
    return max(current_phase, recommended_phase)


# ---- Streaks ----

@dataclass
class StreakUpdate:
    current_streak: int
    longest_streak: int
    first_activity: bool


def update_streak(last_activity: Optional[datetime], current_streak: int, longest_streak: int, today: date) -> StreakUpdate:
    if last_activity is None:
        streak = 1
    else:
        last_day = last_activity.date() if isinstance(last_activity, datetime) else last_activity
        diff_days = (today - last_day).days
        if diff_days <= 0:
            streak = current_streak
        elif diff_days == 1:
            streak = current_streak + 1
        else:
            streak = 1
    return StreakUpdate(
        current_streak=streak,
        longest_streak=max(longest_streak, streak),
        first_activity=last_activity is None,
    )


def segment_minutes(newly_completed: bool, minutes_per_segment: int = 10) -> int:
    return minutes_per_segment if newly_completed else 0


# ---- Checkpoints ----

@dataclass
class CheckpointGrade:
    score: int
    total_points: int
    passed: bool
    results: List[Dict[str, Any]] = field(default_factory=list)


def corrupt_last_letter(word: str) -> str:
    return word[:-1] + ("a" if word[-1:] == "e" else "e")


def generate_checkpoint(phase: int, rng: random.Random, count: int = 15, words: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
    pool = list(words if words is not None else words_for_phase(phase))
    shuffled = rng.sample(pool, len(pool))
    questions: List[Dict[str, Any]] = []
    for i, word in enumerate(shuffled[:count]):
        kind = CHECKPOINT_TYPES[i % 3]
        question: Dict[str, Any] = {"id": i + 1, "type": kind, "answer": word, "points": CHECKPOINT_POINTS}
        if kind == "spelling":
            question["question"] = "Spell the word you hear"
            question["prompt_word"] = word
        elif kind == "multiple_choice":
            options = [word, corrupt_last_letter(word)]
            rng.shuffle(options)
            question["question"] = "Which spelling is correct?"
            question["options"] = options
        else:
            blank = len(word) // 2
            question["question"] = f"Complete the word: {word[:blank]}___{word[blank + 1:]}"
        questions.append(question)
    return questions


def grade_checkpoint(questions: Sequence[Mapping[str, Any]], answers: Mapping[Any, Any], pass_ratio: float = 0.8) -> CheckpointGrade:
    score = 0
    total = 0
    results = []
    for question in questions:
        points = int(question.get("points", CHECKPOINT_POINTS))
        total += points
        correct = is_correct(_lookup(answers, question["id"]), question["answer"])
        if correct:
            score += points
        results.append({"id": question["id"], "correct": correct, "answer": question["answer"]})
    # Fraction keeps the 80% boundary exact (60/75 passes, anything below fails)
    passed = total > 0 and Fraction(score, total) >= Fraction(str(pass_ratio))
    return CheckpointGrade(score=score, total_points=total, passed=passed, results=results)


def checkpoint_state(attempts: Sequence[bool]) -> str:
    """Collapse a phase's attempt log (passed flags) into its state."""
    if not attempts:
        return "not_attempted"
    return "passed" if any(attempts) else "failed"


def next_phase_after_pass(current_phase: Optional[int], passed_phase: int) -> Optional[int]:
    """Phase to advance to after passing ``passed_phase``, or None to stay put."""
    if passed_phase >= MAX_PHASE:
        return None
    if current_phase and current_phase != passed_phase:
        return None
    return passed_phase + 1


def skill_level(current_phase: Optional[int]) -> str:
    phase = current_phase or 1
    if phase < 3:
        return "Beginner"
    if phase < 5:
        return "Intermediate"
    return "Advanced"
