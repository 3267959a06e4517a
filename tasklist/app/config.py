from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # SQLAlchemy URL for the tasks relation
    database_url: str = Field("sqlite:///./tasklist.db")
    database_echo: bool = Field(False)

    # Jinja2 templates / static assets shipped inside the package
    templates_dir: str = Field(str(APP_DIR / "templates"))
    static_dir: str = Field(str(APP_DIR / "static"))

    # One-shot status message carried across the post/redirect/get cycle
    flash_cookie_name: str = Field("_flash")

    # `python -m tasklist` bind address
    host: str = Field("127.0.0.1")
    port: int = Field(8000)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
