import asyncio
import logging

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from .db import Base, SessionLocal, engine
from .cleanup import purge_stale_quizzes
from .errors import register_exception_handlers
from .settings import settings
from .store import seed_catalog
from .routers import auth
from .routers import profile
from .routers import diagnostic
from .routers import activity
from .routers import exercises
from .routers import checkpoints
from .routers import writing
from .routers import bookmarks
from .routers import dashboard

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="SpellQuest API")
register_exception_handlers(app)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(diagnostic.router)
app.include_router(activity.router)
app.include_router(exercises.router)
app.include_router(checkpoints.router)
app.include_router(writing.router)
app.include_router(bookmarks.router)
app.include_router(dashboard.router)


@app.get("/info")
def root():
	return {"status": "ok", "diagnostic_retake_policy": settings.diagnostic_retake_policy}


def _purge_once() -> None:
	db = SessionLocal()
	try:
		purge_stale_quizzes(db)
	except SQLAlchemyError:
		db.rollback()
		logger.exception("Quiz cleanup failed")
	finally:
		db.close()


async def _cleanup_watcher():
	# Startup already ran one pass; repeat daily
	while True:
		await asyncio.sleep(24 * 60 * 60)
		_purge_once()


@app.on_event("startup")
async def startup_event():
	# Initialize DB schema and the static catalog
	Base.metadata.create_all(bind=engine)
	db = SessionLocal()
	try:
		seed_catalog(db)
		auth.ensure_seed_user(db)
	finally:
		db.close()
	_purge_once()
	# Start periodic cleanup loop
	asyncio.create_task(_cleanup_watcher())
