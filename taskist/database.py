import logging
import os

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


logger = logging.getLogger(__name__)

Base = declarative_base()

TASK_COLUMN_MIGRATIONS = [
    ('completed', 'ALTER TABLE tasks ADD COLUMN completed BOOLEAN NOT NULL DEFAULT 0'),
    ('owner_id', 'ALTER TABLE tasks ADD COLUMN owner_id INTEGER NOT NULL DEFAULT 0'),
    ('priority', "ALTER TABLE tasks ADD COLUMN priority VARCHAR NOT NULL DEFAULT 'pt'"),
    ('status', "ALTER TABLE tasks ADD COLUMN status VARCHAR NOT NULL DEFAULT 'scheduled'"),
    ('due_date', 'ALTER TABLE tasks ADD COLUMN due_date VARCHAR'),
]


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() != 'sqlite':
        return create_engine(database_url, echo=echo)

    # One in-memory database per engine has to be shared by every thread.
    if url.database in (None, '', ':memory:'):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )
    else:
        directory = os.path.dirname(url.database)
        if directory:
            os.makedirs(directory, exist_ok=True)
        engine = create_engine(database_url, echo=echo, connect_args={'check_same_thread': False})

    # SQLite leaves foreign keys (and ON DELETE CASCADE) off unless asked per connection.
    event.listen(engine, 'connect', _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def ensure_task_schema(engine: Engine) -> None:
    """Add columns that older ``tasks`` tables are missing.

    Each step is attempted on its own; a failing ALTER is logged and skipped.
    """
    inspector = inspect(engine)

    if 'tasks' not in inspector.get_table_names():
        return

    existing_columns = {column['name'] for column in inspector.get_columns('tasks')}

    for column_name, statement in TASK_COLUMN_MIGRATIONS:
        if column_name in existing_columns:
            continue
        try:
            with engine.begin() as connection:
                connection.execute(text(statement))
            logger.info('Added column tasks.%s', column_name)
        except SQLAlchemyError:
            logger.warning('Could not add column tasks.%s', column_name, exc_info=True)


def init_database(engine: Engine) -> None:
    # Models register their tables on Base.metadata when imported.
    from taskist.models import task, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    ensure_task_schema(engine)
