# migrations/env.py
from alembic import context
from sqlalchemy import engine_from_config, pool

from tutordesk.core.config import settings
from tutordesk.db.session import _normalize
from tutordesk.models import Base

config = context.config

# URL explícita do bootstrap; senão a mesma da aplicação (DATABASE_URL / DATA_DIR)
config.set_main_option("sqlalchemy.url", _normalize(config.attributes.get("database_url") or settings.DATABASE_URL))

target_metadata = Base.metadata

def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config(config.get_section(config.config_ini_section), prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
