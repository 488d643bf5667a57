"""database initialization helpers."""

from server.config import available_environments, normalize_env
from server.inventory_db import init_db as init_inventory_db


def init_all(envs: tuple[str, ...] | None = None) -> list[str]:
    """Initialize the inventory tables.

    By default only the default env and envs whose database is configured
    or already present are touched, so unused envs keep reporting as
    unavailable.

    Returns:
        the initialized envs
    """
    if envs is None:
        default = normalize_env(None)
        envs = tuple(
            env for env, available in available_environments().items()
            if available or env == default
        )
    for env in envs:
        init_inventory_db(env)
    return list(envs)
