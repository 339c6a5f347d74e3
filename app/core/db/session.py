"""Engine and session factory for the report document store."""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config_file import get_settings

settings = get_settings()


def _engine_options(url: str) -> dict:
    options: dict = {"echo": settings.DEBUG, "future": True, "pool_pre_ping": True}
    if url.startswith("postgresql"):
        # Report dates are stored and compared in UTC
        options["pool_size"] = 10
        options["max_overflow"] = 20
        options["connect_args"] = {"connect_timeout": 10, "options": "-c timezone=utc"}
    return options


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()
