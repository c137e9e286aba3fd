from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	GEMINI_API_KEY: str | None = None

	# App Settings
	APP_NAME: str = 'Bahith'
	LOG_LEVEL: str = 'INFO'
	LOG_FILE: Path | None = None

	# Paths
	BASE_DIR: Path = Path(__file__).parent.parent.parent
	OUTPUT_DIR: Path = BASE_DIR / 'data' / 'outputs'

	# LLM Models
	PRIMARY_MODEL: str = 'gemini-3-pro-preview'
	FALLBACK_MODEL: str = 'gemini-2.5-flash'
	OUTLINE_THINKING_BUDGET: int = 2048
	SECTION_THINKING_BUDGET: int = 4096
	ENABLE_SEARCH: bool = True

	# Generation
	SECTION_DELAY_SECONDS: float = 2.5
	ABORT_ON_SECTION_FAILURE: bool = False
	OUTPUT_LANGUAGE: str = 'Arabic'

	# Export
	DOCUMENT_FONT: str = 'Traditional Arabic'
	RIGHT_TO_LEFT: bool = True

	model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')


settings = Settings()
