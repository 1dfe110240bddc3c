from datetime import datetime, timedelta, timezone
from typing import Literal, Optional
import logging
import uuid

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm, OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..settings import settings
from ..db import get_db
from ..errors import AuthError, ConflictError
from ..models import User, UserProgress, AuthSession
from .. import store

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)
logging.getLogger('passlib').setLevel(logging.ERROR)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"


class UserOut(BaseModel):
	id: int
	email: str
	name: Optional[str] = None
	role: str


class SignupRequest(BaseModel):
	email: str = Field(max_length=256)
	password: str = Field(min_length=8)
	name: Optional[str] = Field(default=None, min_length=2, max_length=128)
	role: Literal["STUDENT", "PARENT", "TEACHER", "ADMIN"] = "STUDENT"

	@field_validator("email")
	@classmethod
	def _check_email(cls, value: str) -> str:
		value = value.strip().lower()
		local, _, domain = value.partition("@")
		if not local or "." not in domain:
			raise ValueError("Invalid email address")
		return value


def _bcrypt_safe(password: str) -> str:
	# bcrypt only looks at the first 72 bytes
	password_bytes = password.encode('utf-8')
	if len(password_bytes) > 72:
		password_bytes = password_bytes[:72]
	return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
	return pwd_context.hash(_bcrypt_safe(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
	return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)


def _user_out(user: User) -> UserOut:
	return UserOut(id=user.id, email=user.email, name=user.name, role=user.role)


def create_user(db: Session, email: str, password: str, name: Optional[str] = None, role: str = "STUDENT") -> User:
	"""Add a user with its progress row; the caller commits."""
	user = User(email=email, password_hash=hash_password(password), name=name or email.split("@")[0], role=role)
	db.add(user)
	db.flush()
	db.add(UserProgress(user_id=user.id, current_phase=1))
	store.ensure_phase_progress(db, user.id, 1)
	return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
	return db.execute(select(User).where(User.email == email.strip().lower())).scalar_one_or_none()


def ensure_seed_user(db: Session) -> None:
	email = (settings.seed_username or "").strip().lower()
	password = settings.seed_password_plain
	if not email or not password:
		return
	if get_user_by_email(db, email) is not None:
		return
	create_user(db, email, password)
	db.commit()
	logger.info("Seeded demo account %s", email)


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
	user = get_user_by_email(db, email)
	if user and verify_password(password, user.password_hash):
		return user
	return None


def _resolve_expiry(expires_delta: Optional[timedelta]) -> datetime:
	"""Return a safe JWT expiry timestamp.

	Respects the configured token lifetime when set, and falls back to a
	generous but finite default.
	"""
	delta = expires_delta
	if delta is None:
		minutes = getattr(settings, "access_token_expire_minutes", None)
		if isinstance(minutes, int) and minutes > 0:
			delta = timedelta(minutes=minutes)
		else:
			delta = timedelta(days=30)
	now = datetime.now(timezone.utc)
	try:
		return now + delta
	except OverflowError:
		# Cap at far future but within datetime bounds
		return datetime.max.replace(tzinfo=timezone.utc)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
	to_encode = data.copy()
	expire = _resolve_expiry(expires_delta)
	to_encode.update({"exp": expire})
	encoded_jwt = jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
	return encoded_jwt


@router.post("/signup", status_code=201)
async def signup(req: SignupRequest, db: Session = Depends(get_db)):
	if get_user_by_email(db, req.email) is not None:
		raise ConflictError("User already exists")
	try:
		user = create_user(db, req.email, req.password, req.name, req.role)
		db.commit()
	except IntegrityError:
		# Lost a race with a concurrent signup for the same email
		db.rollback()
		raise ConflictError("User already exists")
	logger.info("New %s account %s", user.role.lower(), user.id)
	return {"success": True, "user": _user_out(user)}


@router.post("/token", response_model=Token)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
	user = authenticate_user(db, form_data.username, form_data.password)
	if not user:
		raise AuthError("Incorrect email or password")
	# A token is only honoured while its session row exists
	session_id = uuid.uuid4().hex
	access_token = create_access_token({"sub": str(user.id), "jti": session_id})
	db.add(AuthSession(session_id=session_id, user_id=user.id))
	db.commit()
	return Token(access_token=access_token)


def _decode(token: str) -> tuple[int, str]:
	try:
		payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
		subject: str | None = payload.get("sub")
		jti: str | None = payload.get("jti")
		if subject is None or jti is None:
			raise AuthError()
		return int(subject), jti
	except (JWTError, ValueError):
		raise AuthError()


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
	user_id, jti = _decode(token)
	row = db.get(AuthSession, jti)
	if not row or row.user_id != user_id:
		raise AuthError()
	user = db.get(User, user_id)
	if user is None:
		raise AuthError()
	# Touch the session for activity tracking
	row.last_activity_at = datetime.utcnow()
	db.commit()
	return user


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
	return _user_out(user)


@router.post("/logout")
async def logout(token: str = Depends(oauth2_scheme), user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	_, jti = _decode(token)
	db.execute(delete(AuthSession).where(AuthSession.session_id == jti))
	db.commit()
	return {"success": True}
