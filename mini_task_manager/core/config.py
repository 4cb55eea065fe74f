from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

REQUIRED_DB_SETTINGS = ("db_host", "db_user", "db_password")


class ConfigError(Exception):
    def __init__(self, missing: List[str]):
        self.missing = missing
        names = ", ".join(name.upper() for name in missing)
        super().__init__(f"Missing required configuration: {names}")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    db_host: Optional[str] = None
    db_port: int = 3306
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: str = "mini_task_manager"
    db_driver: str = "mysql+pymysql"
    db_pool_size: int = 10

    def missing_required(self) -> List[str]:
        missing = []
        for name in REQUIRED_DB_SETTINGS:
            value = getattr(self, name)
            # an empty password is a valid MySQL account setting; only unset counts
            if name == "db_password":
                if value is None:
                    missing.append(name)
            elif not (value or "").strip():
                missing.append(name)
        return missing

    def require_database(self) -> None:
        missing = self.missing_required()
        if missing:
            raise ConfigError(missing)


@lru_cache
def get_settings() -> Settings:
    return Settings()
