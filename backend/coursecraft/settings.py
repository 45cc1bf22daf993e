from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	# Strategy narratives; unset key or NARRATIVE_ENABLED=false means local synthesis only
	narrative_enabled: bool = Field(default=True, validation_alias="NARRATIVE_ENABLED")
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	# Content analysis JSON can run on a cheaper model
	gemini_model_analysis: str | None = Field(default=None, validation_alias="GEMINI_MODEL_ANALYSIS")
	# "ai_studio" (key in query string) or "vertex" (key in x-goog-api-key header)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")
	request_timeout_seconds: float = Field(default=60.0, validation_alias="GEMINI_TIMEOUT_SECONDS")

	# Second chance for a failed Gemini call before falling back to local synthesis
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	openrouter_model: str = Field(default="google/gemini-2.5-flash", validation_alias="OPENROUTER_MODEL")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1/chat/completions", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="http://localhost:8000", validation_alias="OPENROUTER_HTTP_REFERER")
	openrouter_title: str = Field(default="CourseCraft Strategy Engine", validation_alias="OPENROUTER_TITLE")

	# Uploads and analysis
	analysis_prompt_chars: int = Field(default=4000, validation_alias="ANALYSIS_PROMPT_CHARS")
	max_upload_mb: int = Field(default=50, validation_alias="MAX_UPLOAD_MB")
	max_files_per_upload: int = Field(default=10, validation_alias="MAX_FILES_PER_UPLOAD")

	# Sessions: "sql" keeps them in DATABASE_URL (sqlite file by default), "memory" per process
	session_store: str = Field(default="sql", validation_alias="SESSION_STORE")
	session_ttl_days: int = Field(default=7, validation_alias="SESSION_TTL_DAYS")
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	@property
	def generator_configured(self) -> bool:
		return self.narrative_enabled and bool(self.gemini_api_key)


settings = Settings()
