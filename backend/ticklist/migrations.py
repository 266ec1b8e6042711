"""
Ticklist Backend — Programmatic Schema Migration
==================================================

What:  Applies the Alembic revisions up to head from inside the application.
When:  From the lifespan, before the app serves traffic, if
       RUN_MIGRATIONS_ON_STARTUP is set. Otherwise the schema is applied
       externally with `alembic upgrade head`.

Why a worker thread:
    alembic/env.py drives its async engine with asyncio.run(), which refuses
    to start inside an already-running event loop. Running the upgrade in a
    thread gives it a loop of its own.
"""

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from ticklist.config import Settings

logger = logging.getLogger(__name__)

# backend/alembic, next to the ticklist package. Present only in a source
# checkout or editable install; a wheel does not include it.
DEFAULT_SCRIPT_LOCATION = Path(__file__).resolve().parent.parent / "alembic"


def build_alembic_config(settings: Settings) -> Config:
    """
    Alembic Config built in code rather than read from alembic.ini.

    No ini file means env.py skips fileConfig(), which would otherwise
    replace the application's logging setup.

    Raises:
        FileNotFoundError: the script directory has no env.py
    """
    script_location = Path(settings.alembic_script_location or DEFAULT_SCRIPT_LOCATION)
    if not (script_location / "env.py").is_file():
        raise FileNotFoundError(
            f"No Alembic scripts at {script_location}; "
            "set ALEMBIC_SCRIPT_LOCATION to the directory holding env.py"
        )

    config = Config()
    config.set_main_option("script_location", str(script_location))
    # configparser interpolation: a literal % in a password must be doubled
    config.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))
    return config


async def run_migrations(settings: Settings, revision: str = "head") -> None:
    """Upgrade the database to `revision`. Errors propagate and abort startup."""
    config = build_alembic_config(settings)
    logger.info("Applying migrations (target=%s)", revision)
    await asyncio.to_thread(command.upgrade, config, revision)
    logger.info("Migrations applied")
