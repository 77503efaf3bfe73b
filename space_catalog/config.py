from pydantic_settings import BaseSettings, SettingsConfigDict

from space_catalog.services.ship_query import DEFAULT_PAGE_SIZE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./space_catalog.db"
    sql_echo: bool = False
    log_level: str = "INFO"
    default_page_size: int = DEFAULT_PAGE_SIZE


settings = Settings()
