from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DEFAULT_CHROMA_URL: str = "http://localhost:8000"
    VIEWER_API_BASE: str = "http://localhost:8080"
    USE_LOCAL_BACKEND: bool = False  # Set to True to skip the proxy API and talk to ChromaDB directly
    DEFAULT_PAGE_SIZE: int = 10
    PAGE_SIZE_OPTIONS: List[int] = [5, 10, 25, 50, 100]
    EMBEDDING_PREVIEW_LENGTH: int = 10
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


settings = Settings()
