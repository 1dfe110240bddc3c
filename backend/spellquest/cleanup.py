from __future__ import annotations
from datetime import datetime, timedelta
import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session

from .models import IssuedQuiz
from .settings import settings


logger = logging.getLogger(__name__)


def purge_stale_quizzes(db: Session, retention_days: int | None = None) -> int:
	"""Delete issued checkpoints and games older than the retention window.

	Submitted and abandoned quizzes alike; results live in their own tables.
	"""
	days = retention_days if retention_days is not None else settings.quiz_retention_days
	threshold = datetime.utcnow() - timedelta(days=days)
	res = db.execute(delete(IssuedQuiz).where(IssuedQuiz.created_at < threshold))
	db.commit()
	removed = res.rowcount or 0
	if removed:
		logger.info("Purged %d issued quizzes older than %d days", removed, days)
	return removed
