from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import analytics
from ..curriculum import PHASES, WEEKDAYS, daily_schedule
from ..db import get_db
from ..models import Achievement, DailyActivity, ExerciseResult, PhaseProgress, User, UserAchievement, WritingProject
from ..progression import checkpoint_state, skill_level
from .. import store
from .auth import get_current_user
from .checkpoints import attempts_by_phase


router = APIRouter(tags=["dashboard"])

EXERCISE_FIELDS = ("exercise_type", "score", "total_questions", "accuracy", "completed_at")


def _exercises(db: Session, user_id: int, limit: int) -> List[Dict[str, Any]]:
	rows = db.execute(
		select(ExerciseResult)
		.where(ExerciseResult.user_id == user_id)
		.order_by(ExerciseResult.completed_at.desc(), ExerciseResult.id.desc())
		.limit(limit)
	).scalars().all()
	return [store.row_dict(r, EXERCISE_FIELDS) for r in rows]


def _activities(db: Session, user_id: int, limit: int) -> List[Dict[str, Any]]:
	rows = db.execute(
		select(DailyActivity)
		.where(DailyActivity.user_id == user_id)
		.order_by(DailyActivity.date.desc())
		.limit(limit)
	).scalars().all()
	return [store.row_dict(r, ("date", "total_minutes")) for r in rows]


def _phases(db: Session, user_id: int, current_phase: int) -> List[Dict[str, Any]]:
	saved = {
		p.phase_number: p
		for p in db.execute(select(PhaseProgress).where(PhaseProgress.user_id == user_id)).scalars()
	}
	attempts = attempts_by_phase(db, user_id)
	out = []
	for phase in PHASES:
		number = phase["phase_number"]
		row = saved.get(number)
		out.append({
			**phase,
			"locked": number > current_phase,
			"completion_pct": row.completion_pct if row else 0,
			"started_at": row.started_at if row else None,
			"completed_at": row.completed_at if row else None,
			"checkpoint": checkpoint_state([bool(a.passed) for a in attempts.get(number, [])]),
		})
	return out


@router.get("/dashboard")
async def dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	progress = store.get_or_create_progress(db, user.id)
	today = store.today()
	activity = db.execute(
		select(DailyActivity).where(DailyActivity.user_id == user.id, DailyActivity.date == today)
	).scalar_one_or_none()
	out = {
		"user": {"id": user.id, "name": user.name, "email": user.email},
		"progress": store.progress_out(progress),
		"skill_level": skill_level(progress.current_phase),
		"schedule": daily_schedule(progress.current_phase, WEEKDAYS[today.weekday()]),
		"today_minutes": activity.total_minutes if activity else 0,
		"recent_exercises": _exercises(db, user.id, 5),
		"achievements_earned": len(store.earned_achievement_ids(db, user.id)),
		"phases": _phases(db, user.id, progress.current_phase),
	}
	db.commit()
	return out


@router.get("/analytics")
async def analytics_view(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	progress = store.get_or_create_progress(db, user.id)
	exercises = _exercises(db, user.id, 50)
	activities = _activities(db, user.id, 30)
	statuses = [s for (s,) in db.execute(select(WritingProject.status).where(WritingProject.user_id == user.id))]
	attempts = attempts_by_phase(db, user.id)
	out = {
		"progress": store.progress_out(progress),
		"weekly_activity": analytics.weekly_activity(activities, exercises),
		"accuracy_trend": analytics.accuracy_trend(exercises),
		"exercise_distribution": analytics.exercise_distribution(exercises),
		"strengths_weaknesses": analytics.strengths_weaknesses(exercises),
		"average_accuracy": round(analytics.average_accuracy(exercises)),
		"completed_projects": statuses.count("COMPLETED"),
		"in_progress_projects": statuses.count("IN_PROGRESS"),
		"passed_checkpoints": sum(1 for rows in attempts.values() for a in rows if a.passed),
	}
	db.commit()
	return out


@router.get("/achievements")
async def achievements(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	earned = {
		row.achievement_id: row.earned_at
		for row in db.execute(select(UserAchievement).where(UserAchievement.user_id == user.id)).scalars()
	}
	catalog = db.execute(select(Achievement)).scalars().all()
	items = [
		{
			**store.row_dict(a, ("achievement_id", "title", "description", "icon_name", "category", "requirement", "threshold")),
			"earned": a.achievement_id in earned,
			"earned_at": earned.get(a.achievement_id),
		}
		for a in catalog
	]
	return {"achievements": items, "earned": len(earned), "total": len(items)}


@router.get("/phases")
async def phases(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	progress = store.get_or_create_progress(db, user.id)
	out = {"current_phase": progress.current_phase, "phases": _phases(db, user.id, progress.current_phase)}
	db.commit()
	return out
