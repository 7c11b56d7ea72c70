from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from dealership.core.config import settings

db_url = str(settings.SQLALCHEMY_DATABASE_URI)

connect_args = {}
if db_url.startswith("sqlite"):
    # SQLite connections are shared with FastAPI's threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    db_url,
    pool_pre_ping=True,
    connect_args=connect_args,
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Declarative base for every dealership model
Base = declarative_base()


def get_db():
    """
    Yield a session scoped to one request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
