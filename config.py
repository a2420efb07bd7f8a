from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Loan Application API"
    debug: bool = False

    # "memory" keeps applications in-process; "sql" persists them via SQLAlchemy
    store_backend: Literal["memory", "sql"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./loan_applications.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
