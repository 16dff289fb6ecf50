from typing import Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    postgres_user: str = "bookstore"
    postgres_password: str = ""
    postgres_db: str = "bookstore"
    postgres_host: str = "localhost"
    postgres_port: str = "5432"

    # full SQLAlchemy URL, wins over the postgres_* fields when set
    database_url_override: Optional[str] = None
    sql_echo: bool = False
    env: str = "local"

    # ordering rules
    estimated_delivery_days: int = 7
    bulk_operation_max_items: int = 50
    bulk_operation_timeout_seconds: float = 60.0
    wishlist_name_max_length: int = 100

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override

        encoded_password = quote_plus(self.postgres_password)
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
