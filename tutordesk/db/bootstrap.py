# tutordesk/db/bootstrap.py
"""Brings a database to the current schema and seeds what login and allocation need."""
import logging
import os
from typing import Optional

from alembic import command
from alembic.config import Config
from sqlalchemy.orm import sessionmaker

from tutordesk.db.init_db import init_db
from tutordesk.db.session import SessionLocal, make_engine

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

def alembic_config(database_url: Optional[str] = None) -> Config:
    cfg = Config(os.path.join(PROJECT_ROOT, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "migrations"))
    if database_url:
        # lido por migrations/env.py; sem isso vale settings.DATABASE_URL
        cfg.attributes["database_url"] = database_url
    return cfg

def run_migrations_and_seed(database_url: Optional[str] = None, *, revision: str = "head") -> None:
    """Upgrades to ``revision`` and then syncs the identifier counters and the demo admin.

    Safe to run on every startup: the migrations skip what already exists and
    the seed only raises counters or creates the admin when none is present.
    """
    command.upgrade(alembic_config(database_url), revision)
    logger.info("migrations applied", extra={"revision": revision})

    if database_url is None:
        with SessionLocal() as db:
            init_db(db)
        return

    engine = make_engine(database_url)
    try:
        with sessionmaker(bind=engine, autoflush=False)() as db:
            init_db(db)
    finally:
        engine.dispose()
