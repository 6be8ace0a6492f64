from collections.abc import Generator
from typing import Annotated
import logging
import os

from fastapi import Depends
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

logger = logging.getLogger(__name__)

# Records live only as long as the process does. Point DATABASE_URL at a
# real database to keep them.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

if DATABASE_URL.startswith("sqlite"):
    # One shared connection, otherwise every session sees an empty database.
    engine = create_engine(
        DATABASE_URL,
        echo=SQL_ECHO,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(DATABASE_URL, echo=SQL_ECHO)


def create_db_and_tables() -> None:
    """Create all tables in the database if they don't exist."""
    SQLModel.metadata.create_all(engine)


def init_db() -> None:
    """Drop everything, recreate the tables and load the seed records."""
    from seed import seed_database

    SQLModel.metadata.drop_all(engine)
    create_db_and_tables()
    with Session(engine) as session:
        seed_database(session)
    logger.info("Database initialised at %s", DATABASE_URL)


def get_session() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_session)]
