import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite gets foreign key enforcement switched on."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine | None = None):
    """Create all tables"""
    # Models must be imported so they register on Base.metadata
    import app.models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database tables ready (%s)", target.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
