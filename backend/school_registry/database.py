import logging
from typing import Optional
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from school_registry.config.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def get_database_url(config: Settings = default_settings) -> str:
    """Build the connection URL from settings, honouring a DATABASE_URL override."""
    if config.DATABASE_URL:
        return config.DATABASE_URL
    return f"postgresql+psycopg2://{config.DB_USER}:{config.DB_PASSWORD}@{config.DB_HOST}:{config.DB_PORT}/{config.DB_NAME}"


def create_db_engine(config: Settings = default_settings) -> Engine:
    """
    Create the process-wide engine.

    The pool is sized to DB_POOL_SIZE with no overflow, so requests beyond
    capacity wait for a free connection (up to DB_POOL_TIMEOUT seconds)
    instead of opening new ones.
    """
    url = get_database_url(config)
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})

    sslmode = "verify-full" if config.DB_SSL_VERIFY else "prefer"
    return create_engine(
        url,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_pre_ping=True,
        connect_args={"sslmode": sslmode},
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """FastAPI dependency to get a database session from the app's pool."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine):
    """Create the schools table if it doesn't exist yet."""
    try:
        # Import models so they are registered with Base's metadata
        from school_registry import models  # noqa: F401

        logger.info("Attempting to create database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully (if they didn't exist)!")
    except Exception as e:
        logger.error(f"Database initialization error: {e}")
        logger.error("Please ensure the database server is running and accessible.")
        raise


def describe_database_url(config: Optional[Settings] = None) -> str:
    """Connection string with the password masked, for log messages."""
    config = config or default_settings
    if config.DATABASE_URL:
        return config.DATABASE_URL.split("@")[-1]
    return f"postgresql+psycopg2://{config.DB_USER}:<PASSWORD>@{config.DB_HOST}:{config.DB_PORT}/{config.DB_NAME}"
