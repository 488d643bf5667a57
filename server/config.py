"""Server configuration read from the environment.

Each runtime environment (dev, demo, prod) points at its own inventory
database. Paths are resolved per call so tests can swap them with
monkeypatch.setenv.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()  # load environment variables from .env file

RUNTIME_ENVS = ("dev", "demo", "prod")
DEFAULT_DATA_DIR = Path(__file__).parent / "data"


def cors_origins() -> list[str]:
    # comma-separated, "*" for all (development only)
    return os.getenv("CORS_ORIGINS", "*").split(",")


def normalize_env(value: str | None) -> str:
    """unknown or missing values fall back to the default environment."""
    if value in RUNTIME_ENVS:
        return value
    default = os.getenv("INVENTORY_ENV", "dev")
    return default if default in RUNTIME_ENVS else "dev"


def _configured_path(env: str) -> str | None:
    path = os.getenv(f"INVENTORY_DB_PATH_{env.upper()}")
    if not path and env == "dev":
        path = os.getenv("INVENTORY_DB_PATH")
    return path or None


def get_db_path(env: str | None = None) -> Path:
    """database file for an environment, default server/data/inventory-{env}.db."""
    env = normalize_env(env)
    configured = _configured_path(env)
    if configured:
        return Path(configured)
    return DEFAULT_DATA_DIR / f"inventory-{env}.db"


def available_environments() -> dict[str, bool]:
    """an environment is available when its database path is configured or the
    default file exists. queries never create database files."""
    return {
        env: _configured_path(env) is not None or get_db_path(env).exists()
        for env in RUNTIME_ENVS
    }
