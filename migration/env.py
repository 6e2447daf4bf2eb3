from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from infra.db.base import Base, default_db_url
import infra.db.models  # noqa: F401  (registers tables on Base.metadata)


config = context.config

# infra/migrate.py configures logging itself; only the CLI reads the ini loggers
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _db_url() -> str:
    return config.get_main_option("sqlalchemy.url") or default_db_url()


def _configure_kwargs() -> dict:
    # SQLite needs batch mode for ALTER TABLE
    return {
        "target_metadata": target_metadata,
        "render_as_batch": True,
        "compare_type": True,
    }


def run_migrations_offline() -> None:
    context.configure(
        url=_db_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(_db_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_kwargs())
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
