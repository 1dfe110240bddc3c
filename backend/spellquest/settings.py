from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Auth configuration
	jwt_secret_key: str = Field(default="change-me", validation_alias="JWT_SECRET_KEY")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
	access_token_expire_minutes: int = Field(default=120, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")
	# Seed user (demo account created at startup when both are set)
	seed_username: str | None = Field(default=None, validation_alias="SEED_USERNAME")
	seed_password_plain: str | None = Field(default=None, validation_alias="SEED_PASSWORD")

	# Diagnostic retakes: "overwrite" resets currentPhase to the new recommendation,
	# "keep_highest" never moves a learner below the phase they already reached
	diagnostic_retake_policy: Literal["overwrite", "keep_highest"] = Field(default="keep_highest", validation_alias="DIAGNOSTIC_RETAKE_POLICY")

	# Checkpoints and games
	checkpoint_pass_ratio: float = Field(default=0.8, validation_alias="CHECKPOINT_PASS_RATIO")
	checkpoint_question_count: int = Field(default=15, validation_alias="CHECKPOINT_QUESTION_COUNT")
	exercise_word_count: int = Field(default=10, validation_alias="EXERCISE_WORD_COUNT")
	hint_penalty: float = Field(default=0.5, validation_alias="HINT_PENALTY")

	# Daily practice: each completed segment is worth a fixed number of minutes
	segment_minutes: int = Field(default=10, validation_alias="SEGMENT_MINUTES")

	# Optimistic concurrency retries on UserProgress writes
	progress_update_retries: int = Field(default=3, validation_alias="PROGRESS_UPDATE_RETRIES")

	# Issued quizzes are purged after this many days
	quiz_retention_days: int = Field(default=7, validation_alias="QUIZ_RETENTION_DAYS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
