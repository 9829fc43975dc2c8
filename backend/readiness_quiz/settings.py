from __future__ import annotations

from typing import Dict, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	anthropic_api_key: str | None = Field(default=None, validation_alias="ANTHROPIC_API_KEY")
	anthropic_model: str = Field(default="claude-haiku-4-5-20251001", validation_alias="ANTHROPIC_MODEL")
	anthropic_base_url: str = Field(default="https://api.anthropic.com/v1/messages", validation_alias="ANTHROPIC_BASE_URL")
	anthropic_version: str = Field(default="2023-06-01", validation_alias="ANTHROPIC_VERSION")
	anthropic_max_tokens: int = Field(default=2000, validation_alias="ANTHROPIC_MAX_TOKENS")
	anthropic_timeout_seconds: float = Field(default=30.0, validation_alias="ANTHROPIC_TIMEOUT_SECONDS")

	# Database; when unset the location depends on the environment (see database_location)
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
	app_env: str = Field(default="development", validation_alias="APP_ENV")
	# Serverless hosts only allow writes under /tmp
	vercel: str | None = Field(default=None, validation_alias="VERCEL")

	host: str = Field(default="0.0.0.0", validation_alias="HOST")
	port: int = Field(default=3001, validation_alias="PORT")
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# Synthetic data
	seed_count: int = Field(default=100, validation_alias="SEED_COUNT")
	synthetic_prefix: str = Field(default="demo_", validation_alias="SYNTHETIC_PREFIX")
	# JSON object, e.g. {"reading": 0.7}
	weakness_targets: Dict[str, float] = Field(default_factory=dict, validation_alias="WEAKNESS_TARGETS")

	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	def database_location(self) -> str:
		if self.database_url:
			return self.database_url
		if self.vercel or self.app_env.lower() == "production":
			return "sqlite:////tmp/assessments.db"
		return "sqlite:///./assessments.db"

	def allowed_origins(self) -> List[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]


settings = Settings()
