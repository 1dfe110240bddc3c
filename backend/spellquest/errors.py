from __future__ import annotations
from typing import Any, Optional
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger(__name__)


class SpellQuestError(HTTPException):
	"""Base error; raised from handlers and rendered as ``{"detail": ...}``."""
	status_code = 500
	default_detail = "Internal error"

	def __init__(self, detail: Optional[Any] = None):
		super().__init__(status_code=self.status_code, detail=detail if detail is not None else self.default_detail)


class ValidationError(SpellQuestError):
	status_code = 400
	default_detail = "Invalid request"

	def __init__(self, detail: Optional[Any] = None, field: Optional[str] = None):
		if field is not None:
			detail = [{"loc": ["body", field], "msg": detail or self.default_detail}]
		super().__init__(detail)


class AuthError(SpellQuestError):
	status_code = 401
	default_detail = "Could not validate credentials"

	def __init__(self, detail: Optional[Any] = None):
		super().__init__(detail)
		self.headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(SpellQuestError):
	status_code = 404
	default_detail = "Not found"


class ConflictError(SpellQuestError):
	status_code = 409
	default_detail = "Conflict"


class PersistenceError(SpellQuestError):
	status_code = 500
	# Never leak database details to the client
	default_detail = "Failed to save changes"


async def _request_validation_handler(request: Request, exc: RequestValidationError):
	errors = [
		{"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
		for err in exc.errors()
	]
	return JSONResponse(status_code=400, content={"detail": jsonable_encoder(errors)})


async def _sqlalchemy_handler(request: Request, exc: SQLAlchemyError):
	logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
	err = PersistenceError()
	return JSONResponse(status_code=err.status_code, content={"detail": err.detail})


def register_exception_handlers(app: FastAPI) -> None:
	app.add_exception_handler(RequestValidationError, _request_validation_handler)
	app.add_exception_handler(SQLAlchemyError, _sqlalchemy_handler)
