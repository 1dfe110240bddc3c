"""Aggregations behind the dashboard and analytics views.

Inputs are plain mappings (one per stored row) so the functions stay
independent of the ORM; see ``routers/dashboard.py`` for the conversion.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Sequence, Tuple


DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _day(value: Any) -> date:
    return value.date() if isinstance(value, datetime) else value


def display_type(exercise_type: str) -> str:
    return exercise_type.replace("_", " ").title()


def weekly_activity(activities: Sequence[Mapping[str, Any]], exercises: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    data = [{"day": label, "minutes": 0, "exercises": 0} for label in DAY_LABELS]
    for activity in activities:
        data[_day(activity["date"]).weekday()]["minutes"] += activity.get("total_minutes") or 0
    for result in exercises:
        data[_day(result["completed_at"]).weekday()]["exercises"] += 1
    return data


def accuracy_trend(exercises: Sequence[Mapping[str, Any]], days: int = 7) -> List[Dict[str, Any]]:
    """Mean exercise accuracy per calendar day, last ``days`` active days."""
    grouped: Dict[date, Tuple[float, int]] = {}
    for result in exercises:
        day = _day(result["completed_at"])
        total, count = grouped.get(day, (0.0, 0))
        grouped[day] = (total + (result.get("accuracy") or 0), count + 1)
    ordered = sorted(grouped.items())[-days:] if days > 0 else []
    return [{"date": day.isoformat(), "accuracy": round(total / count)} for day, (total, count) in ordered]


def exercise_distribution(exercises: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    counts: Dict[str, int] = {}
    for result in exercises:
        kind = result.get("exercise_type") or "other"
        counts[kind] = counts.get(kind, 0) + 1
    return [{"name": display_type(kind), "value": value} for kind, value in counts.items()]


def strengths_weaknesses(exercises: Sequence[Mapping[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    pooled: Dict[str, List[int]] = {}
    for result in exercises:
        kind = result.get("exercise_type") or "other"
        bucket = pooled.setdefault(kind, [0, 0])
        bucket[0] += result.get("score") or 0
        bucket[1] += result.get("total_questions") or 0
    ranked = sorted(
        (
            {"type": display_type(kind), "accuracy": round(correct / total * 100) if total > 0 else 0}
            for kind, (correct, total) in pooled.items()
        ),
        key=lambda row: row["accuracy"],
        reverse=True,
    )
    return {"strengths": ranked[:2], "weaknesses": list(reversed(ranked[-2:]))}


def average_accuracy(exercises: Sequence[Mapping[str, Any]]) -> float:
    if not exercises:
        return 0.0
    return sum(result.get("accuracy") or 0 for result in exercises) / len(exercises)


def top_error_patterns(histogram: Mapping[str, int], n: int = 3) -> List[Dict[str, Any]]:
    ranked = sorted(histogram.items(), key=lambda item: item[1], reverse=True)
    return [{"category": category, "count": count} for category, count in ranked[:n]]
