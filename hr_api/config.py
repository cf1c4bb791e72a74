import os
from dataclasses import dataclass
from typing import Optional

import yaml
from sqlalchemy.engine import URL

# ----------------------------
# Configuration sources
# ----------------------------
CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "config")
SET_FILE = os.path.abspath(os.path.join(CONFIG_DIR, "settings.yaml"))


def _load_yaml(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str] = None
    db_driver: str = "postgresql+psycopg"
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "hr"
    db_echo: bool = False

    # Pool bounds: max connections, acquire timeout (s), idle recycle (s)
    db_pool_max: int = 5
    db_pool_acquire_timeout: int = 30
    db_pool_idle: int = 10

    host: str = "0.0.0.0"
    port: int = 3000
    grpc_port: int = 50051
    grpc_max_workers: int = 10
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self):
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


# Environment variable -> (settings field, type)
ENV_VARS = {
    "DATABASE_URL": ("database_url", str),
    "DB_DRIVER": ("db_driver", str),
    "DB_HOST": ("db_host", str),
    "DB_PORT": ("db_port", int),
    "DB_USER": ("db_user", str),
    "DB_PASSWORD": ("db_password", str),
    "DB_NAME": ("db_name", str),
    "DB_ECHO": ("db_echo", bool),
    "DB_POOL_MAX": ("db_pool_max", int),
    "DB_POOL_ACQUIRE_TIMEOUT": ("db_pool_acquire_timeout", int),
    "DB_POOL_IDLE": ("db_pool_idle", int),
    "HOST": ("host", str),
    "PORT": ("port", int),
    "GRPC_PORT": ("grpc_port", int),
    "GRPC_MAX_WORKERS": ("grpc_max_workers", int),
    "LOG_LEVEL": ("log_level", str),
}


def _coerce(value, kind):
    if kind is bool:
        return str(value).strip().lower() in ("1", "true", "yes", "on")
    return kind(value)


def load_settings(path: str = SET_FILE) -> Settings:
    """
    Builds the settings from three layers, last one wins:
    dataclass defaults, the optional YAML file, environment variables.
    """
    values = {}

    # YAML keys are the lowercase field names
    fields = {field for field, _ in ENV_VARS.values()}
    for key, value in (_load_yaml(path) or {}).items():
        if key in fields and value is not None:
            values[key] = value

    for env, (field, kind) in ENV_VARS.items():
        raw = os.getenv(env)
        if raw is not None and raw != "":
            values[field] = raw

    kinds = dict(ENV_VARS.values())
    return Settings(**{k: _coerce(v, kinds[k]) for k, v in values.items()})
