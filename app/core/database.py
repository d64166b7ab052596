import logging
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.config import settings

logger = logging.getLogger(__name__)


def get_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for the given URL.

    SQLite (local development and tests) gets a single shared connection so
    an in-memory database survives across sessions. Everything else gets a
    pooled engine.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,  # Connection pool size
        max_overflow=20  # Allow up to 20 connections beyond pool_size
    )


engine = get_engine(settings.DATABASE_URL)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping_db(bind: Engine = engine) -> bool:
    """Run a trivial query to confirm the database is reachable."""
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True


def init_db(bind: Engine = engine) -> None:
    """
    Initialize database.

    PostgreSQL schemas are managed by Alembic ("alembic upgrade head").
    SQLite databases are local throwaways, so their tables are created here.
    """
    from app.models import job, bid  # noqa: F401  Import models to register them

    if bind.dialect.name == "sqlite":
        Base.metadata.create_all(bind=bind)
        logger.info("Created tables for SQLite database")
