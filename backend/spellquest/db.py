from __future__ import annotations
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .settings import settings


DATABASE_URL = settings.database_url or "sqlite:///./spellquest.db"

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}


def enable_sqlite_savepoints(bind: Engine) -> None:
	# pysqlite defers BEGIN on its own, which breaks SAVEPOINT; emit BEGIN ourselves
	@event.listens_for(bind, "connect")
	def _disable_pysqlite_begin(dbapi_connection, connection_record):
		dbapi_connection.isolation_level = None

	@event.listens_for(bind, "begin")
	def _emit_begin(conn):
		conn.exec_driver_sql("BEGIN")


engine = create_engine(DATABASE_URL, connect_args=_connect_args, future=True)
if DATABASE_URL.startswith("sqlite"):
	enable_sqlite_savepoints(engine)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()
