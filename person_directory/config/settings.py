"""
Application settings and configuration.
"""
from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from dotenv import load_dotenv
load_dotenv()

class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from .env (like VITE_* for the frontend)
    )

    # Directory Store
    database_url: str = "sqlite:///./data/directory.db"
    database_echo: bool = False

    # Blob Storage
    storage_dir: str = "./storage"
    photo_bucket: str = "person_photos"
    temp_prefix: str = "temp"
    public_base_url: str = "http://localhost:8000"
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB

    # Embedding Configuration
    embedding_backend: str = "hf-inference"  # Options: hf-inference, clip
    embedding_model_name: str = "sentence-transformers/clip-ViT-B-32"
    inference_api_url: str = "https://router.huggingface.co/hf-inference/models"
    hugging_face_access_token: Optional[str] = None
    models_dir: str = "./models"
    http_timeout: float = 30.0

    # Search / Dashboard
    gateway_result_limit: int = 10
    recent_searches_limit: int = 5

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["*"]

    # Logging
    log_dir: str = "./logs"
    log_level: str = "INFO"
    log_max_bytes: int = 10 * 1024 * 1024  # 10MB
    log_backup_count: int = 5

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._ensure_directories()

    def _ensure_directories(self):
        """Create necessary directories if they don't exist."""
        dirs = [
            self.log_dir,
            self.bucket_dir,
        ]
        sqlite_path = self.sqlite_path
        if sqlite_path is not None:
            dirs.append(str(sqlite_path.parent))
        for dir_path in dirs:
            Path(dir_path).mkdir(parents=True, exist_ok=True)

    @property
    def bucket_dir(self) -> Path:
        return Path(self.storage_dir) / self.photo_bucket

    @property
    def sqlite_path(self) -> Optional[Path]:
        """Path of the SQLite database file, or None for other backends and in-memory databases."""
        prefix = "sqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        path = self.database_url[len(prefix):]
        if not path or path == ":memory:":
            return None
        return Path(path)

    @property
    def public_storage_url(self) -> str:
        return f"{self.public_base_url.rstrip('/')}/storage/{self.photo_bucket}"

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
