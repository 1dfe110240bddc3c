from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..analytics import top_error_patterns
from ..curriculum import DIAGNOSTIC_PART_MAX, DIAGNOSTIC_QUESTIONS
from ..db import get_db
from ..errors import NotFoundError
from ..models import DiagnosticResult, User
from ..progression import phase_after_diagnostic, score_diagnostic
from ..settings import settings
from .. import store
from .auth import get_current_user


router = APIRouter(prefix="/diagnostic", tags=["diagnostic"])

logger = logging.getLogger(__name__)


class DiagnosticSubmission(BaseModel):
	# Question id -> learner answer
	answers: Dict[str, Any]


def _result_out(row: DiagnosticResult) -> dict:
	return {
		"id": row.id,
		"total_score": row.total_score,
		"part_scores": {"A": row.part_a_score, "B": row.part_b_score, "C": row.part_c_score, "D": row.part_d_score},
		"recommended_phase": row.recommended_phase,
		"error_patterns": row.error_patterns,
		"top_error_patterns": top_error_patterns(row.error_patterns or {}),
		"completed_at": row.completed_at,
	}


@router.get("/questions")
async def questions():
	public = [{k: v for k, v in q.items() if k != "answer"} for q in DIAGNOSTIC_QUESTIONS]
	return {"questions": public, "part_max": DIAGNOSTIC_PART_MAX, "max_score": sum(DIAGNOSTIC_PART_MAX.values())}


@router.post("")
async def submit(req: DiagnosticSubmission, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	score = score_diagnostic(req.answers)

	def work(db: Session) -> dict:
		progress = store.get_or_create_progress(db, user.id)
		previous_phase = progress.current_phase
		new_phase = phase_after_diagnostic(previous_phase, score.recommended_phase, settings.diagnostic_retake_policy)
		result = DiagnosticResult(
			user_id=user.id,
			total_score=score.total_score,
			part_a_score=score.part_scores["A"],
			part_b_score=score.part_scores["B"],
			part_c_score=score.part_scores["C"],
			part_d_score=score.part_scores["D"],
			recommended_phase=score.recommended_phase,
			error_patterns=score.error_patterns,
			answers=req.answers,
		)
		db.add(result)
		progress.diagnostic_completed = True
		progress.diagnostic_score = score.total_score
		progress.recommended_phase = score.recommended_phase
		progress.current_phase = new_phase
		store.ensure_phase_progress(db, user.id, new_phase)
		unlocked = store.award(db, user.id, progress)
		if new_phase != previous_phase:
			logger.info("User %s placed in phase %d (was %d)", user.id, new_phase, previous_phase)
		return {
			"success": True,
			"total_score": score.total_score,
			"part_scores": score.part_scores,
			"recommended_phase": score.recommended_phase,
			"current_phase": new_phase,
			"error_patterns": score.error_patterns,
			"top_error_patterns": top_error_patterns(score.error_patterns),
			"unlocked_achievements": unlocked,
		}

	return store.run_with_retry(db, work)


@router.get("/latest")
async def latest(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	row = db.execute(
		select(DiagnosticResult)
		.where(DiagnosticResult.user_id == user.id)
		.order_by(DiagnosticResult.completed_at.desc(), DiagnosticResult.id.desc())
	).scalars().first()
	if row is None:
		raise NotFoundError("No diagnostic result yet")
	return _result_out(row)
