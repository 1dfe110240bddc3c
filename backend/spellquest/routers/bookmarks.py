from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import ResourceBookmark, User
from .. import store
from .auth import get_current_user


router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


class BookmarkRequest(BaseModel):
	resource_title: str = Field(min_length=1, max_length=256)
	resource_category: str = Field(default="", max_length=64)
	action: Literal["add", "remove"]


@router.get("")
async def list_bookmarks(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	rows = db.execute(
		select(ResourceBookmark).where(ResourceBookmark.user_id == user.id).order_by(ResourceBookmark.created_at.desc())
	).scalars().all()
	return {"bookmarks": [store.row_dict(r, ("resource_title", "resource_category", "created_at")) for r in rows]}


@router.post("")
async def toggle_bookmark(req: BookmarkRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	def work(db: Session) -> dict:
		if req.action == "add":
			store.insert_if_absent(db, ResourceBookmark(
				user_id=user.id,
				resource_title=req.resource_title,
				resource_category=req.resource_category,
			))
		else:
			db.execute(delete(ResourceBookmark).where(
				ResourceBookmark.user_id == user.id,
				ResourceBookmark.resource_title == req.resource_title,
			))
		return {"success": True, "resource_title": req.resource_title, "bookmarked": req.action == "add"}

	return store.run_with_retry(db, work)
