from typing import Any, Dict, Literal, Optional
import logging
import random

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..curriculum import words_for_phase
from ..db import get_db
from ..errors import NotFoundError, ValidationError
from ..exercises import GAME_TYPES, build_exercise, grade_exercise, pick_words, public_view, reveal_hint, words_mastered_delta
from ..models import ExerciseResult, User
from ..settings import settings
from .. import store
from .auth import get_current_user


router = APIRouter(prefix="/exercises", tags=["exercises"])

logger = logging.getLogger(__name__)

_rng = random.Random()


class StartExercise(BaseModel):
	game: Literal["spelling_bee", "word_match", "fill_blank", "word_sort"]
	phase_number: Optional[int] = Field(default=None, ge=1, le=6)


class HintRequest(BaseModel):
	item_id: int


class ExerciseSubmission(BaseModel):
	# Item id -> answer (a spelling, a chosen option or a category)
	answers: Dict[str, Any]
	time_spent: int = Field(default=0, ge=0)


def _result_out(row: ExerciseResult) -> dict:
	return store.row_dict(row, (
		"id", "exercise_type", "phase_number", "score", "total_questions", "accuracy",
		"time_spent", "words_attempted", "incorrect_words", "completed_at",
	))


@router.post("/start")
async def start(req: StartExercise, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	progress = store.get_or_create_progress(db, user.id)
	phase = req.phase_number or progress.current_phase
	if phase > progress.current_phase:
		raise ValidationError(f"Phase {phase} is locked", field="phase_number")
	words = pick_words(words_for_phase(phase), _rng, settings.exercise_word_count)
	exercise = build_exercise(req.game, words, _rng)
	quiz = store.issue_quiz(db, user.id, req.game, phase, exercise)
	db.commit()
	return {"quiz_id": quiz.id, "phase_number": phase, **public_view(exercise)}


@router.post("/{quiz_id}/hint")
async def hint(quiz_id: str, req: HintRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	quiz = store.load_quiz(db, user.id, quiz_id, GAME_TYPES)
	if quiz.kind != "fill_blank":
		raise ValidationError("Hints are only available in fill-in-the-blank games")
	exercise = store.quiz_payload(quiz)
	try:
		revealed = reveal_hint(exercise, req.item_id)
	except KeyError:
		raise NotFoundError("Item not found")
	if revealed is None:
		raise ValidationError("No hidden letters left")
	store.save_quiz_payload(db, quiz, exercise)
	db.commit()
	return {"success": True, **revealed, "hint_penalty": settings.hint_penalty}


@router.post("/{quiz_id}/submit")
async def submit(quiz_id: str, req: ExerciseSubmission, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	def work(db: Session) -> dict:
		quiz = store.load_quiz(db, user.id, quiz_id, GAME_TYPES)
		exercise = store.quiz_payload(quiz)
		grade = grade_exercise(exercise, req.answers, settings.hint_penalty)
		store.consume_quiz(db, quiz)
		db.add(ExerciseResult(
			user_id=user.id,
			exercise_type=quiz.kind,
			phase_number=quiz.phase_number,
			score=grade.score,
			total_questions=grade.total_questions,
			accuracy=grade.accuracy,
			time_spent=req.time_spent,
			words_attempted=grade.words_attempted,
			incorrect_words=grade.incorrect_words,
		))
		db.flush()
		progress = store.get_or_create_progress(db, user.id)
		store.increment_progress(db, user.id, words_mastered=words_mastered_delta(grade.words_attempted, grade.incorrect_words))
		store.recompute_spelling_accuracy(db, user.id)
		unlocked = store.award(db, user.id, progress, exercise_accuracy=grade.accuracy)
		return {
			"success": True,
			"score": grade.score,
			"total_questions": grade.total_questions,
			"accuracy": grade.accuracy,
			"incorrect_words": grade.incorrect_words,
			"hints_used": grade.hints_used,
			"hint_penalty": grade.hint_penalty,
			"answers": {str(item["id"]): item["answer"] for item in exercise["items"]},
			"words_mastered": progress.words_mastered,
			"spelling_accuracy": progress.spelling_accuracy,
			"unlocked_achievements": unlocked,
		}

	return store.run_with_retry(db, work)


@router.get("/recent")
async def recent(limit: int = Query(default=20, ge=1, le=100), user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	rows = db.execute(
		select(ExerciseResult)
		.where(ExerciseResult.user_id == user.id)
		.order_by(ExerciseResult.completed_at.desc(), ExerciseResult.id.desc())
		.limit(limit)
	).scalars().all()
	return {"results": [_result_out(r) for r in rows]}
