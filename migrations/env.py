# migrations/env.py

import os
from logging.config import fileConfig

from alembic import context
from flask import current_app

from phpayroll import create_app, db
# Import the payroll tables so their metadata is registered for autogenerate
from phpayroll.models import tables  # noqa: F401

config = context.config

# alembic.ini lives next to this directory when the project ships one
if config.config_file_name is not None:
    alembic_ini_path = os.path.join(os.path.dirname(__file__), '..', 'alembic.ini')
    fileConfig(alembic_ini_path if os.path.exists(alembic_ini_path) else config.config_file_name)

target_metadata = db.metadata


def run_migrations_offline():
    """Emit SQL for the payroll tables without connecting to the database."""
    app = create_app(os.environ.get('FLASK_ENV', 'default'))

    context.configure(
        url=app.config['SQLALCHEMY_DATABASE_URI'],
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Apply migrations against the configured payroll database."""
    def process_revision_directives(context, revision, directives):
        # Skip empty autogenerated revisions
        if getattr(config.cmd_opts, 'autogenerate', False) and directives[0].upgrade_ops.is_empty():
            directives[:] = []

    app = create_app(os.environ.get('FLASK_ENV', 'default'))

    with app.app_context():
        with db.engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                process_revision_directives=process_revision_directives,
                **current_app.extensions["migrate"].configure_args
            )

            with context.begin_transaction():
                context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
