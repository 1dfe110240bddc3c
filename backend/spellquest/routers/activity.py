from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..curriculum import SEGMENTS, WEEKDAYS, daily_schedule
from ..db import get_db
from ..errors import ValidationError
from ..models import DailyActivity, User
from ..progression import segment_minutes
from ..settings import settings
from .. import store
from .auth import get_current_user


router = APIRouter(prefix="/daily-activity", tags=["daily-activity"])


class SegmentCompletion(BaseModel):
	segment: Literal["visual", "auditory", "kinesthetic"]
	phase_number: int = Field(ge=1, le=6)


def _activity_out(row: Optional[DailyActivity]) -> Optional[dict]:
	if row is None:
		return None
	out = store.row_dict(row, ("date", "phase_number", "day_of_week", "total_minutes"))
	out["segments"] = {name: bool(getattr(row, f"{name}_completed")) for name in SEGMENTS}
	return out


@router.post("")
async def complete_segment(req: SegmentCompletion, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	def work(db: Session) -> dict:
		now = store.localnow()
		progress = store.get_or_create_progress(db, user.id)
		activity = store.ensure_daily_activity(db, user.id, now.date(), req.phase_number)
		credited = store.mark_segment(db, activity.id, req.segment, settings.segment_minutes)
		minutes = segment_minutes(credited, settings.segment_minutes)
		store.increment_progress(db, user.id, total_study_minutes=minutes)
		streak = store.touch_streak(progress, now)
		unlocked = store.award(db, user.id, progress, first_activity=streak.first_activity)
		db.refresh(activity)
		return {
			"success": True,
			"minutes_credited": minutes,
			"activity": _activity_out(activity),
			"current_streak": progress.current_streak,
			"longest_streak": progress.longest_streak,
			"total_study_minutes": progress.total_study_minutes,
			"unlocked_achievements": unlocked,
		}

	return store.run_with_retry(db, work)


@router.get("/schedule")
async def schedule(day: Optional[str] = Query(default=None), user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	today = store.today()
	progress = store.get_or_create_progress(db, user.id)
	if day is not None and day.capitalize() not in WEEKDAYS:
		raise ValidationError("Unknown day of week")
	day_name = day or WEEKDAYS[today.weekday()]
	activity = db.execute(
		select(DailyActivity).where(DailyActivity.user_id == user.id, DailyActivity.date == today)
	).scalar_one_or_none()
	db.commit()
	return {
		"phase_number": progress.current_phase,
		"schedule": daily_schedule(progress.current_phase, day_name),
		"today": _activity_out(activity),
	}
