from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://collabdocs:collabdocs@db:5432/collabdocs"
    jwt_secret: str
    jwt_algorithm: str = "HS256"

    log_level: str = "INFO"
    sql_echo: bool = False
    cors_origins: List[str] = ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
