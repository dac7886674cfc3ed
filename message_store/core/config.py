import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


TRUTHY_VALUES = frozenset({"true", "1", "yes", "on"})


def is_truthy(value: str | None) -> bool:
    """Case-insensitive match against the truthy set; everything else is false."""
    if value is None:
        return False
    return value.lower() in TRUTHY_VALUES


def parse_bool(value: str | None, default: bool) -> bool:
    # Unset and empty both mean "use the default".
    if value is None or value == "":
        return default
    return is_truthy(value)


def get_env(key: str, default: str) -> str:
    value = os.getenv(key, "")
    if value == "":
        return default
    return value


def get_env_as_bool(key: str, default: bool) -> bool:
    return parse_bool(os.getenv(key), default)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_ignore_empty=True)

    HOST: str = "localhost"
    PORT: str = "8080"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_USER: str = "admin"
    DB_PASSWORD: str = "admin"
    DB_KEYSPACE: str = "messaging"
    DB_INIT: bool = True

    STORE_PROVIDER: str = "cassandra"

    @field_validator("DB_INIT", mode="before")
    @classmethod
    def parse_db_init(cls, v):
        if isinstance(v, bool):
            return v
        return parse_bool(str(v), cls.model_fields["DB_INIT"].default)
