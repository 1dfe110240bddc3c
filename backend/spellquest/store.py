"""Persistence helpers shared by the routers.

Every mutating endpoint runs its unit of work through ``run_with_retry`` so
that the whole operation commits once or not at all. Counters move with SQL
expressions (``col = col + n``) and never through read-modify-write.
"""
from __future__ import annotations
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar
import json
import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .achievements import AchievementContext, evaluate
from .curriculum import ACHIEVEMENTS, PHASES, WEEKDAYS
from .errors import ConflictError, NotFoundError, PersistenceError
from .models import (
	Achievement,
	DailyActivity,
	ExerciseResult,
	IssuedQuiz,
	Phase,
	PhaseProgress,
	UserAchievement,
	UserProgress,
	WritingProject,
)
from .progression import StreakUpdate, update_streak
from .settings import settings


logger = logging.getLogger(__name__)

T = TypeVar("T")


def utcnow() -> datetime:
	return datetime.utcnow()


def localnow() -> datetime:
	# Study days and streaks roll over at the server's local midnight
	return datetime.now()


def today() -> date:
	return localnow().date()


# ---- Unit of work ----

def run_with_retry(db: Session, work: Callable[[Session], T], retries: Optional[int] = None) -> T:
	"""Run ``work`` and commit; replay it when a versioned row changed underneath.

	``work`` must re-read whatever it needs, since a retry starts from a
	rolled-back session.
	"""
	attempts = max(1, retries if retries is not None else settings.progress_update_retries)
	for attempt in range(1, attempts + 1):
		try:
			result = work(db)
			db.commit()
			return result
		except StaleDataError:
			db.rollback()
			logger.warning("Concurrent progress update, retrying (%d/%d)", attempt, attempts)
		except SQLAlchemyError:
			db.rollback()
			logger.exception("Unit of work failed")
			raise PersistenceError()
		except Exception:
			db.rollback()
			raise
	logger.error("Giving up after %d conflicting progress updates", attempts)
	raise PersistenceError()


def insert_if_absent(db: Session, row: Any) -> bool:
	"""Insert ``row`` inside a savepoint; False when a unique constraint already holds it."""
	try:
		with db.begin_nested():
			db.add(row)
	except IntegrityError:
		return False
	return True


# ---- Progress ----

def get_progress(db: Session, user_id: int) -> Optional[UserProgress]:
	return db.execute(select(UserProgress).where(UserProgress.user_id == user_id)).scalar_one_or_none()


def get_or_create_progress(db: Session, user_id: int) -> UserProgress:
	row = get_progress(db, user_id)
	if row is not None:
		return row
	insert_if_absent(db, UserProgress(user_id=user_id, current_phase=1))
	return get_progress(db, user_id)


def increment_progress(db: Session, user_id: int, **deltas: int) -> None:
	values = {name: getattr(UserProgress, name) + amount for name, amount in deltas.items() if amount}
	if not values:
		return
	db.execute(
		update(UserProgress)
		.where(UserProgress.user_id == user_id)
		.values(**values)
		.execution_options(synchronize_session=False)
	)


def recompute_spelling_accuracy(db: Session, user_id: int) -> None:
	mean = (
		select(func.coalesce(func.avg(ExerciseResult.accuracy), 0))
		.where(ExerciseResult.user_id == user_id)
		.scalar_subquery()
	)
	db.execute(
		update(UserProgress)
		.where(UserProgress.user_id == user_id)
		.values(spelling_accuracy=mean)
		.execution_options(synchronize_session=False)
	)


def touch_streak(progress: UserProgress, now: Optional[datetime] = None) -> StreakUpdate:
	now = now or localnow()
	result = update_streak(progress.last_activity_date, progress.current_streak or 0, progress.longest_streak or 0, now.date())
	progress.current_streak = result.current_streak
	progress.longest_streak = result.longest_streak
	progress.last_activity_date = now
	return result


def reload(db: Session, progress: UserProgress) -> UserProgress:
	"""Flush pending ORM changes, then pick up counters moved by SQL updates."""
	db.flush()
	db.refresh(progress)
	return progress


def ensure_phase_progress(db: Session, user_id: int, phase_number: int) -> PhaseProgress:
	query = select(PhaseProgress).where(PhaseProgress.user_id == user_id, PhaseProgress.phase_number == phase_number)
	row = db.execute(query).scalar_one_or_none()
	if row is None:
		insert_if_absent(db, PhaseProgress(user_id=user_id, phase_number=phase_number))
		row = db.execute(query).scalar_one()
	return row


def complete_phase(db: Session, user_id: int, phase_number: int) -> PhaseProgress:
	row = ensure_phase_progress(db, user_id, phase_number)
	row.completion_pct = 100
	if row.completed_at is None:
		row.completed_at = utcnow()
	return row


# ---- Achievements ----

def earned_achievement_ids(db: Session, user_id: int) -> List[str]:
	rows = db.execute(
		select(UserAchievement.achievement_id).where(UserAchievement.user_id == user_id).order_by(UserAchievement.earned_at, UserAchievement.id)
	)
	return [aid for (aid,) in rows]


def unlock_achievements(db: Session, user_id: int, achievement_ids: Iterable[str]) -> List[str]:
	"""Record unlocks that are not held yet and return only the new ones."""
	held = set(earned_achievement_ids(db, user_id))
	unlocked: List[str] = []
	for aid in achievement_ids:
		if aid in held or aid in unlocked:
			continue
		if insert_if_absent(db, UserAchievement(user_id=user_id, achievement_id=aid)):
			unlocked.append(aid)
	if unlocked:
		logger.info("User %s unlocked achievements: %s", user_id, ", ".join(unlocked))
	return unlocked


def award(db: Session, user_id: int, progress: UserProgress, **flags: Any) -> List[str]:
	"""Evaluate the rule table against a fresh progress snapshot and unlock."""
	progress = reload(db, progress)
	ctx = AchievementContext(
		current_streak=progress.current_streak or 0,
		words_mastered=progress.words_mastered or 0,
		spelling_accuracy=progress.spelling_accuracy or 0.0,
		total_study_minutes=progress.total_study_minutes or 0,
		completed_projects=flags.pop("completed_projects", None) or completed_project_count(db, user_id),
		diagnostic_completed=bool(progress.diagnostic_completed),
		**flags,
	)
	return unlock_achievements(db, user_id, evaluate(ctx))


# ---- Daily activity ----

def ensure_daily_activity(db: Session, user_id: int, day: date, phase_number: int) -> DailyActivity:
	query = select(DailyActivity).where(DailyActivity.user_id == user_id, DailyActivity.date == day)
	row = db.execute(query).scalar_one_or_none()
	if row is None:
		insert_if_absent(db, DailyActivity(
			user_id=user_id,
			date=day,
			phase_number=phase_number,
			day_of_week=WEEKDAYS[day.weekday()],
		))
		row = db.execute(query).scalar_one()
	return row


def mark_segment(db: Session, activity_id: int, segment: str, minutes: int) -> bool:
	"""Flip one segment flag; True only for the request that actually flipped it."""
	column = getattr(DailyActivity, f"{segment}_completed")
	res = db.execute(
		update(DailyActivity)
		.where(DailyActivity.id == activity_id, column.is_(False))
		.values({column.key: True, "total_minutes": DailyActivity.total_minutes + minutes})
		.execution_options(synchronize_session=False)
	)
	return (res.rowcount or 0) == 1


# ---- Writing ----

def completed_project_count(db: Session, user_id: int) -> int:
	return db.execute(
		select(func.count(WritingProject.id)).where(WritingProject.user_id == user_id, WritingProject.status == "COMPLETED")
	).scalar_one()


# ---- Issued quizzes ----

def issue_quiz(db: Session, user_id: int, kind: str, phase_number: int, payload: Dict[str, Any]) -> IssuedQuiz:
	row = IssuedQuiz(
		id=uuid.uuid4().hex,
		user_id=user_id,
		kind=kind,
		phase_number=phase_number,
		payload_json=json.dumps(payload),
	)
	db.add(row)
	return row


def load_quiz(db: Session, user_id: int, quiz_id: str, kinds: Optional[Iterable[str]] = None) -> IssuedQuiz:
	row = db.get(IssuedQuiz, quiz_id)
	if row is None or row.user_id != user_id or (kinds is not None and row.kind not in set(kinds)):
		raise NotFoundError("Quiz not found")
	if row.consumed_at is not None:
		raise ConflictError("Quiz already submitted")
	return row


def quiz_payload(row: IssuedQuiz) -> Dict[str, Any]:
	return json.loads(row.payload_json)


def save_quiz_payload(db: Session, row: IssuedQuiz, payload: Dict[str, Any]) -> None:
	row.payload_json = json.dumps(payload)
	db.add(row)


def consume_quiz(db: Session, row: IssuedQuiz) -> None:
	res = db.execute(
		update(IssuedQuiz)
		.where(IssuedQuiz.id == row.id, IssuedQuiz.consumed_at.is_(None))
		.values(consumed_at=utcnow())
		.execution_options(synchronize_session=False)
	)
	if (res.rowcount or 0) != 1:
		raise ConflictError("Quiz already submitted")


# ---- Catalog ----

def seed_catalog(db: Session) -> None:
	for entry in ACHIEVEMENTS:
		db.merge(Achievement(**entry))
	for entry in PHASES:
		db.merge(Phase(**{k: v for k, v in entry.items() if k != "objectives"}))
	db.commit()


# ---- Serialization ----

PROGRESS_FIELDS = (
	"current_phase", "phase_completion", "words_mastered", "spelling_accuracy",
	"current_streak", "longest_streak", "total_study_minutes", "creative_word_count",
	"diagnostic_completed", "diagnostic_score", "recommended_phase", "last_activity_date",
)


def row_dict(row: Any, fields: Iterable[str]) -> Dict[str, Any]:
	return {name: getattr(row, name) for name in fields}


def progress_out(progress: Optional[UserProgress]) -> Optional[Dict[str, Any]]:
	if progress is None:
		return None
	return row_dict(progress, PROGRESS_FIELDS)
