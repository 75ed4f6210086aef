import logging
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    books_file: Path = Field(Path("data/books.json"), alias="BOOKS_FILE")

    # Logging
    logs_dir: Path = Field(Path("logs"), alias="LOGS_DIR")
    log_file: Path = Field(Path("logs/app.log"), alias="LOG_FILE")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Web API
    host: str = Field("127.0.0.1", alias="HOST")
    port: int = Field(3000, alias="PORT")
    cors_origins: List[str] = Field(["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False)

    def model_post_init(self, __context):
        base_dir = Path(__file__).resolve().parent.parent  # project root
        def _to_abs(p: Path) -> Path:
            return p if p.is_absolute() else (base_dir / p).resolve()
        # Normalize paths relative to project root when given as relative
        self.books_file = _to_abs(self.books_file)
        self.logs_dir = _to_abs(self.logs_dir)
        self.log_file = _to_abs(self.log_file)

        level = (self.log_level or "").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {self.log_level!r}")
        self.log_level = level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


settings = Settings()
