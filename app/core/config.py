from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "People API"
    app_env: str = "development"
    frontend_url: str = "http://localhost:3000"

    # Database (SQLite for local dev; any SQLAlchemy async URL works)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./people_dev.db",
        alias="DATABASE_URL",
    )

    # Paging
    default_page_size: int = Field(default=30, ge=1, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(
        default=1000, ge=1, alias="MAX_PAGE_SIZE",
    )  # larger ?size= values are rejected with 400
    empty_page_not_found: bool = Field(
        default=False, alias="EMPTY_PAGE_NOT_FOUND",
    )  # True: list endpoints answer 404 instead of 200 [] when nothing matches

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
