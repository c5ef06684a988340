from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from dojo.core.config import settings


def normalize_database_url(url: str) -> str:
    """Use the psycopg 3 driver for plain postgresql:// URLs; leave SQLite alone."""
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


database_url = normalize_database_url(settings.database_url)
is_sqlite = database_url.startswith("sqlite")

# Request handlers run in a threadpool; SQLite connections must be shareable
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)

if is_sqlite:

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
