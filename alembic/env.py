from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from hotel_console.config import settings
from hotel_console.models.base import Base
# Import all model classes so their tables are registered on Base.metadata
from hotel_console.models.hotel import Hotel  # noqa: F401
from hotel_console.models.role import Role  # noqa: F401
from hotel_console.models.user import User  # noqa: F401
from hotel_console.models.privilege_document import PrivilegeDocument  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against the configured database."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
