from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..progression import skill_level
from .. import store
from .auth import get_current_user


router = APIRouter(prefix="/profile", tags=["profile"])


PROFILE_FIELDS = ("name", "avatar_id", "theme_color", "title", "bio")


class ProfileUpdate(BaseModel):
	name: Optional[str] = Field(default=None, min_length=2, max_length=128)
	avatar_id: Optional[str] = Field(default=None, max_length=64)
	theme_color: Optional[str] = Field(default=None, max_length=32)
	title: Optional[str] = Field(default=None, max_length=128)
	bio: Optional[str] = Field(default=None, max_length=500)


def _profile(db: Session, user: User) -> dict:
	progress = store.get_or_create_progress(db, user.id)
	return {
		"id": user.id,
		"email": user.email,
		"role": user.role,
		**store.row_dict(user, PROFILE_FIELDS),
		"created_at": user.created_at,
		"skill_level": skill_level(progress.current_phase),
		"progress": store.progress_out(progress),
		"achievements": store.earned_achievement_ids(db, user.id),
	}


@router.get("")
async def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	profile = _profile(db, user)
	db.commit()
	return profile


@router.put("")
async def update_profile(req: ProfileUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	# Only fields present in the body change
	for name, value in req.model_dump(exclude_unset=True).items():
		setattr(user, name, value)
	db.commit()
	return {"success": True, **store.row_dict(user, ("id",) + PROFILE_FIELDS)}
