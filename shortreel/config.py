from pydantic_settings import BaseSettings
from functools import lru_cache

DEFAULT_SECRET_KEY = "your-secret-key"


class Settings(BaseSettings):
    # Database (default "sqlite://" is in-memory SQLite, lives as long as the process)
    database_url: str = "sqlite://"

    # JWT
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # Short-form uploads: folder path (empty = <project>/uploads/videos)
    video_upload_dir: str = ""

    # Wallet
    starting_wallet: int = 500
    gift_credits_creator: bool = False

    # Feed
    feed_page_size: int = 10

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == DEFAULT_SECRET_KEY


@lru_cache
def get_settings() -> Settings:
    return Settings()
