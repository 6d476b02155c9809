from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Linked By Six API"
    environment: str = "dev"
    api_prefix: str = "/v1"
    log_level: str = "INFO"

    database_dsn: str = "sqlite:///./linkedby6.db"
    db_pool_size: int = Field(default=10, ge=1, le=200)
    db_max_overflow: int = Field(default=20, ge=0, le=400)
    db_pool_timeout_seconds: int = Field(default=30, ge=1, le=600)
    db_pool_recycle_seconds: int = Field(default=1800, ge=30, le=86400)

    graph_backend: str = "http"
    graph_service_url: str = "https://neo4j-query-service.onrender.com"
    graph_request_timeout_seconds: float = Field(default=20.0, gt=0.0, le=300.0)
    graph_retry_max_attempts: int = Field(default=3, ge=1, le=10)
    neo4j_uri: str = ""
    neo4j_user: str = ""
    neo4j_password: str = ""
    neo4j_database: str = "neo4j"

    max_degrees: int = Field(default=6, ge=1, le=15)
    connection_relationship_types: str = "FAMILY_MEMBER,FRIEND,OWNS,EMPLOYEE_OF"
    fallback_max_placeholders: int = Field(default=3, ge=0, le=15)

    cors_allow_origins: str = "http://localhost:8081,http://127.0.0.1:8081"

    def relationship_types(self) -> tuple[str, ...]:
        return tuple(part.strip() for part in self.connection_relationship_types.split(",") if part.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
