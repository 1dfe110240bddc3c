from typing import Literal, Optional
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..challenges import COMPLETION_MIN_WORDS, count_words, generate_challenge
from ..curriculum import WRITING_PROJECTS
from ..db import get_db
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import User, WritingChallenge, WritingProject
from ..progression import skill_level
from .. import store
from .auth import get_current_user


router = APIRouter(prefix="/writing", tags=["writing"])

logger = logging.getLogger(__name__)

_PROJECTS = {p["project_number"]: p for p in WRITING_PROJECTS}

CHALLENGE_FIELDS = (
	"id", "challenge_type", "title", "prompt", "guidelines", "examples", "spelling_focus",
	"word_goal", "level", "theme", "source_project_id", "content", "word_count", "status",
	"unlocked_at", "completed_at",
)


class SaveProject(BaseModel):
	project_number: int = Field(ge=1, le=len(WRITING_PROJECTS))
	content: str = ""
	status: Literal["DRAFT", "IN_PROGRESS", "COMPLETED"] = "DRAFT"


class SaveChallenge(BaseModel):
	content: str = ""
	status: Literal["DRAFT", "IN_PROGRESS", "COMPLETED"] = "DRAFT"


def _project_out(row: Optional[WritingProject]) -> Optional[dict]:
	if row is None:
		return None
	return store.row_dict(row, ("project_number", "title", "content", "word_count", "status", "completed_at", "updated_at"))


def _check_completion(status: str, word_count: int) -> None:
	if status == "COMPLETED" and word_count < COMPLETION_MIN_WORDS:
		raise ValidationError(f"At least {COMPLETION_MIN_WORDS} words are needed to complete", field="content")


def _check_transition(current: str, requested: str) -> bool:
	"""Return True when the save moves the piece into COMPLETED."""
	if current == "COMPLETED" and requested != "COMPLETED":
		raise ConflictError("Completed work cannot be reopened")
	return current != "COMPLETED" and requested == "COMPLETED"


@router.get("/projects")
async def projects(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	rows = db.execute(select(WritingProject).where(WritingProject.user_id == user.id)).scalars().all()
	saved = {r.project_number: r for r in rows}
	return {
		"projects": [{**p, "saved": _project_out(saved.get(p["project_number"]))} for p in WRITING_PROJECTS],
		"completed": sum(1 for r in rows if r.status == "COMPLETED"),
	}


@router.post("")
async def save_project(req: SaveProject, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	word_count = count_words(req.content)
	_check_completion(req.status, word_count)
	catalog = _PROJECTS[req.project_number]

	def work(db: Session) -> dict:
		query = select(WritingProject).where(WritingProject.user_id == user.id, WritingProject.project_number == req.project_number)
		row = db.execute(query).scalar_one_or_none()
		if row is None:
			store.insert_if_absent(db, WritingProject(user_id=user.id, project_number=req.project_number, title=catalog["title"]))
			row = db.execute(query).scalar_one()
		completing = _check_transition(row.status, req.status)
		row.content = req.content
		row.word_count = word_count
		row.status = req.status
		progress = store.get_or_create_progress(db, user.id)
		new_challenge = None
		unlocked = []
		if completing:
			row.completed_at = store.utcnow()
			store.increment_progress(db, user.id, creative_word_count=word_count)
			new_challenge = _unlock_challenge(db, user.id, req.project_number, skill_level(progress.current_phase))
			unlocked = store.award(db, user.id, progress)
		db.flush()
		return {
			"success": True,
			"project": _project_out(row),
			"new_challenge": new_challenge,
			"unlocked_achievements": unlocked,
		}

	return store.run_with_retry(db, work)


def _unlock_challenge(db: Session, user_id: int, project_number: int, level: str) -> Optional[dict]:
	"""Create the reward challenge for a project, at most once."""
	challenge = WritingChallenge(user_id=user_id, **generate_challenge(project_number, level))
	if not store.insert_if_absent(db, challenge):
		return None
	logger.info("User %s unlocked %s challenge for project %d", user_id, challenge.challenge_type, project_number)
	return store.row_dict(challenge, CHALLENGE_FIELDS)


@router.get("/challenges")
async def challenges(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	rows = db.execute(
		select(WritingChallenge)
		.where(WritingChallenge.user_id == user.id)
		.order_by(WritingChallenge.unlocked_at.desc(), WritingChallenge.id.desc())
	).scalars().all()
	return {"challenges": [store.row_dict(r, CHALLENGE_FIELDS) for r in rows]}


@router.post("/challenges/{challenge_id}")
async def save_challenge(challenge_id: int, req: SaveChallenge, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	word_count = count_words(req.content)
	_check_completion(req.status, word_count)

	def work(db: Session) -> dict:
		row = db.get(WritingChallenge, challenge_id)
		if row is None or row.user_id != user.id:
			raise NotFoundError("Challenge not found")
		completing = _check_transition(row.status, req.status)
		row.content = req.content
		row.word_count = word_count
		row.status = req.status
		if completing:
			row.completed_at = store.utcnow()
			store.increment_progress(db, user.id, creative_word_count=word_count)
		db.flush()
		return {"success": True, "challenge": store.row_dict(row, CHALLENGE_FIELDS)}

	return store.run_with_retry(db, work)
