from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Integer, Float, Boolean, Text, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .db import Base


class User(Base):
	__tablename__ = "users"
	id = Column(Integer, primary_key=True, autoincrement=True)
	email = Column(String(256), unique=True, index=True, nullable=False)
	password_hash = Column(String(256), nullable=False)
	name = Column(String(128), nullable=True)
	role = Column(String(16), default="STUDENT", nullable=False)
	# Profile customisation
	avatar_id = Column(String(64), nullable=True)
	theme_color = Column(String(32), nullable=True)
	title = Column(String(128), nullable=True)
	bio = Column(String(500), nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

	progress = relationship("UserProgress", uselist=False, back_populates="user")


class AuthSession(Base):
	__tablename__ = "auth_sessions"
	# Token jti; a token is only valid while its row exists
	session_id = Column(String(64), primary_key=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	last_activity_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class UserProgress(Base):
	__tablename__ = "user_progress"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
	current_phase = Column(Integer, default=1, nullable=False)
	phase_completion = Column(Float, default=0, nullable=False)
	words_mastered = Column(Integer, default=0, nullable=False)
	spelling_accuracy = Column(Float, default=0, nullable=False)
	current_streak = Column(Integer, default=0, nullable=False)
	longest_streak = Column(Integer, default=0, nullable=False)
	total_study_minutes = Column(Integer, default=0, nullable=False)
	creative_word_count = Column(Integer, default=0, nullable=False)
	diagnostic_completed = Column(Boolean, default=False, nullable=False)
	diagnostic_score = Column(Integer, nullable=True)
	recommended_phase = Column(Integer, nullable=True)
	last_activity_date = Column(DateTime, nullable=True)
	version_id = Column(Integer, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

	user = relationship("User", back_populates="progress")

	__mapper_args__ = {"version_id_col": version_id}


class DiagnosticResult(Base):
	__tablename__ = "diagnostic_results"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	total_score = Column(Integer, nullable=False)
	part_a_score = Column(Integer, default=0, nullable=False)
	part_b_score = Column(Integer, default=0, nullable=False)
	part_c_score = Column(Integer, default=0, nullable=False)
	part_d_score = Column(Integer, default=0, nullable=False)
	recommended_phase = Column(Integer, nullable=False)
	error_patterns = Column(JSON, default=dict, nullable=False)
	answers = Column(JSON, default=dict, nullable=False)
	completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class DailyActivity(Base):
	__tablename__ = "daily_activities"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	date = Column(Date, nullable=False)
	phase_number = Column(Integer, default=1, nullable=False)
	day_of_week = Column(String(16), nullable=False)
	visual_completed = Column(Boolean, default=False, nullable=False)
	auditory_completed = Column(Boolean, default=False, nullable=False)
	kinesthetic_completed = Column(Boolean, default=False, nullable=False)
	total_minutes = Column(Integer, default=0, nullable=False)

	__table_args__ = (
		UniqueConstraint("user_id", "date", name="uniq_daily_activity"),
	)


class CheckpointResult(Base):
	__tablename__ = "checkpoint_results"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	phase_number = Column(Integer, nullable=False)
	score = Column(Integer, nullable=False)
	total_points = Column(Integer, nullable=False)
	passed = Column(Boolean, nullable=False)
	attempt_number = Column(Integer, nullable=False)
	answers = Column(JSON, default=dict, nullable=False)
	completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class PhaseProgress(Base):
	__tablename__ = "phase_progress"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	phase_number = Column(Integer, nullable=False)
	completion_pct = Column(Float, default=0, nullable=False)
	started_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	completed_at = Column(DateTime, nullable=True)

	__table_args__ = (
		UniqueConstraint("user_id", "phase_number", name="uniq_phase_progress"),
	)


class ExerciseResult(Base):
	__tablename__ = "exercise_results"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	exercise_type = Column(String(32), nullable=False)
	phase_number = Column(Integer, nullable=False)
	score = Column(Integer, nullable=False)
	total_questions = Column(Integer, nullable=False)
	accuracy = Column(Float, nullable=False)
	time_spent = Column(Integer, default=0, nullable=False)
	words_attempted = Column(JSON, default=list, nullable=False)
	incorrect_words = Column(JSON, default=list, nullable=False)
	completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class WritingProject(Base):
	__tablename__ = "writing_projects"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	project_number = Column(Integer, nullable=False)
	title = Column(String(256), nullable=False)
	content = Column(Text, default="", nullable=False)
	word_count = Column(Integer, default=0, nullable=False)
	status = Column(String(16), default="DRAFT", nullable=False)
	completed_at = Column(DateTime, nullable=True)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

	__table_args__ = (
		UniqueConstraint("user_id", "project_number", name="uniq_writing_project"),
	)


class WritingChallenge(Base):
	__tablename__ = "writing_challenges"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	challenge_type = Column(String(32), nullable=False)
	title = Column(String(256), nullable=False)
	prompt = Column(Text, nullable=False)
	guidelines = Column(JSON, default=list, nullable=False)
	examples = Column(JSON, default=list, nullable=False)
	spelling_focus = Column(String(256), nullable=False)
	word_goal = Column(Integer, nullable=False)
	level = Column(String(16), nullable=False)
	theme = Column(String(32), nullable=False)
	source_project_id = Column(Integer, nullable=False)
	content = Column(Text, default="", nullable=False)
	word_count = Column(Integer, default=0, nullable=False)
	status = Column(String(16), default="DRAFT", nullable=False)
	unlocked_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	completed_at = Column(DateTime, nullable=True)

	__table_args__ = (
		UniqueConstraint("user_id", "source_project_id", name="uniq_challenge_source"),
	)


class UserAchievement(Base):
	__tablename__ = "user_achievements"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	achievement_id = Column(String(64), nullable=False)
	earned_at = Column(DateTime, default=datetime.utcnow, nullable=False)

	__table_args__ = (
		UniqueConstraint("user_id", "achievement_id", name="uniq_user_achievement"),
	)


class ResourceBookmark(Base):
	__tablename__ = "resource_bookmarks"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	resource_title = Column(String(256), nullable=False)
	resource_category = Column(String(64), nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

	__table_args__ = (
		UniqueConstraint("user_id", "resource_title", name="uniq_bookmark"),
	)


class IssuedQuiz(Base):
	__tablename__ = "issued_quizzes"
	# Generated checkpoint/exercise content, graded server-side on submit
	id = Column(String(64), primary_key=True)
	user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
	kind = Column(String(32), nullable=False)  # "checkpoint" or a game type
	phase_number = Column(Integer, nullable=False)
	payload_json = Column(Text, nullable=False)  # JSON string snapshot
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	consumed_at = Column(DateTime, nullable=True)


class Achievement(Base):
	__tablename__ = "achievements"
	achievement_id = Column(String(64), primary_key=True)
	title = Column(String(128), nullable=False)
	description = Column(String(256), nullable=False)
	icon_name = Column(String(64), nullable=False)
	category = Column(String(32), nullable=False)
	requirement = Column(String(128), nullable=False)
	threshold = Column(Integer, nullable=False)


class Phase(Base):
	__tablename__ = "phases"
	phase_number = Column(Integer, primary_key=True)
	title = Column(String(128), nullable=False)
	description = Column(String(256), nullable=False)
	weeks = Column(String(32), nullable=False)
	total_sessions = Column(Integer, nullable=False)
