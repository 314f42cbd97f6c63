from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from shortreel.config import get_settings

settings = get_settings()


def is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(url: str):
    """SQLite needs check_same_thread=False for FastAPI; in-memory SQLite shares one connection."""
    connect_args = {}
    kwargs = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if is_memory_url(url):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, connect_args=connect_args, echo=False, **kwargs)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create tables if they don't exist yet."""
    import shortreel.models  # noqa: F401  (register mappers)

    Base.metadata.create_all(bind=bind or engine)
