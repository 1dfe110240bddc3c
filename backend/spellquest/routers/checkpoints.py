from typing import Any, Dict
import logging
import random

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..curriculum import MAX_PHASE, PHASES
from ..db import get_db
from ..errors import ConflictError, ValidationError
from ..models import CheckpointResult, User
from ..progression import checkpoint_state, generate_checkpoint, grade_checkpoint, next_phase_after_pass
from ..settings import settings
from .. import store
from .auth import get_current_user


router = APIRouter(prefix="/checkpoints", tags=["checkpoints"])

logger = logging.getLogger(__name__)

_rng = random.Random()

CHECKPOINT_KIND = "checkpoint"


class CheckpointSubmission(BaseModel):
	answers: Dict[str, Any]


def attempts_by_phase(db: Session, user_id: int) -> Dict[int, list]:
	rows = db.execute(
		select(CheckpointResult)
		.where(CheckpointResult.user_id == user_id)
		.order_by(CheckpointResult.phase_number, CheckpointResult.attempt_number)
	).scalars().all()
	grouped: Dict[int, list] = {}
	for row in rows:
		grouped.setdefault(row.phase_number, []).append(row)
	return grouped


def phase_summary(phase_number: int, attempts: list) -> dict:
	return {
		"phase_number": phase_number,
		"state": checkpoint_state([bool(a.passed) for a in attempts]),
		"attempts": len(attempts),
		"best_score": max((a.score for a in attempts), default=None),
		"total_points": attempts[-1].total_points if attempts else None,
		"last_attempt_at": attempts[-1].completed_at if attempts else None,
	}


def _ensure_not_passed(db: Session, user_id: int, phase_number: int) -> None:
	passed = db.execute(
		select(func.count(CheckpointResult.id)).where(
			CheckpointResult.user_id == user_id,
			CheckpointResult.phase_number == phase_number,
			CheckpointResult.passed.is_(True),
		)
	).scalar_one()
	if passed:
		raise ConflictError(f"Phase {phase_number} checkpoint already passed")


@router.post("/{phase_number}/start")
async def start(phase_number: int = Path(ge=1, le=MAX_PHASE), user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	progress = store.get_or_create_progress(db, user.id)
	if phase_number > progress.current_phase:
		raise ValidationError(f"Phase {phase_number} is locked")
	_ensure_not_passed(db, user.id, phase_number)
	questions = generate_checkpoint(phase_number, _rng, settings.checkpoint_question_count)
	quiz = store.issue_quiz(db, user.id, CHECKPOINT_KIND, phase_number, {"questions": questions})
	db.commit()
	public = [{k: v for k, v in q.items() if k != "answer"} for q in questions]
	return {
		"quiz_id": quiz.id,
		"phase_number": phase_number,
		"questions": public,
		"total_points": sum(q["points"] for q in questions),
		"pass_ratio": settings.checkpoint_pass_ratio,
	}


@router.post("/{quiz_id}/submit")
async def submit(quiz_id: str, req: CheckpointSubmission, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	def work(db: Session) -> dict:
		quiz = store.load_quiz(db, user.id, quiz_id, [CHECKPOINT_KIND])
		phase_number = quiz.phase_number
		# A quiz issued before the pass must not add attempts to a passed phase
		_ensure_not_passed(db, user.id, phase_number)
		grade = grade_checkpoint(store.quiz_payload(quiz)["questions"], req.answers, settings.checkpoint_pass_ratio)
		store.consume_quiz(db, quiz)
		previous = db.execute(
			select(func.count(CheckpointResult.id)).where(
				CheckpointResult.user_id == user.id,
				CheckpointResult.phase_number == phase_number,
			)
		).scalar_one()
		db.add(CheckpointResult(
			user_id=user.id,
			phase_number=phase_number,
			score=grade.score,
			total_points=grade.total_points,
			passed=grade.passed,
			attempt_number=previous + 1,
			answers=req.answers,
		))
		progress = store.get_or_create_progress(db, user.id)
		advanced_to = None
		if grade.passed:
			store.complete_phase(db, user.id, phase_number)
			advanced_to = next_phase_after_pass(progress.current_phase, phase_number)
			if advanced_to is not None:
				progress.current_phase = advanced_to
				progress.phase_completion = 0
				store.ensure_phase_progress(db, user.id, advanced_to)
				logger.info("User %s passed phase %d checkpoint, advanced to phase %d", user.id, phase_number, advanced_to)
			else:
				logger.info("User %s passed phase %d checkpoint", user.id, phase_number)
		unlocked = store.award(db, user.id, progress, passed_phase=phase_number if grade.passed else None)
		return {
			"success": True,
			"phase_number": phase_number,
			"score": grade.score,
			"total_points": grade.total_points,
			"passed": grade.passed,
			"attempt_number": previous + 1,
			"results": grade.results,
			"current_phase": progress.current_phase,
			"advanced_to": advanced_to,
			"unlocked_achievements": unlocked,
		}

	return store.run_with_retry(db, work)


@router.get("")
async def overview(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	progress = store.get_or_create_progress(db, user.id)
	grouped = attempts_by_phase(db, user.id)
	phases = []
	for phase in PHASES:
		number = phase["phase_number"]
		summary = phase_summary(number, grouped.get(number, []))
		summary["title"] = phase["title"]
		summary["locked"] = number > progress.current_phase
		phases.append(summary)
	db.commit()
	return {"current_phase": progress.current_phase, "checkpoints": phases}
