"""
This module manages the "db" object which is the gateway into the SQLAlchemy
ORM used by BileMo.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from bilemo.config import config

# Database context - determines whether we're in production or test mode
IS_TEST_MODE = False
TEST_ENGINE = None
TEST_SESSION_LOCAL = None

# Production database components
PROD_ENGINE = None
PROD_SESSION_LOCAL = None
PROD_DATABASE_URL = None


def build_database_url(db_config: dict) -> str:
    """
    Build the SQLAlchemy URL from the database section of bilemo.yaml.

    A DATABASE_URL environment variable takes precedence.
    """
    env_url = os.getenv("DATABASE_URL")
    if env_url:
        return env_url

    if db_config["user"] == "sqlite" or not db_config["host"]:
        return f"sqlite:///{db_config['name']}"

    return (
        f"postgresql://{db_config['user']}:{db_config['password']}"
        f"@{db_config['host']}:{db_config['port']}/{db_config['name']}"
    )


def _init_production_database():
    """Initialize production database connection using configuration."""
    global PROD_ENGINE, PROD_SESSION_LOCAL, PROD_DATABASE_URL  # pylint: disable=global-statement

    if PROD_ENGINE is not None:
        return

    PROD_DATABASE_URL = build_database_url(config.get_config()["database"])

    connect_args = {}
    if PROD_DATABASE_URL.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    PROD_ENGINE = create_engine(PROD_DATABASE_URL, connect_args=connect_args, echo=False)
    PROD_SESSION_LOCAL = sessionmaker(
        autocommit=False, autoflush=False, bind=PROD_ENGINE
    )


# Get the base model class - we can use this to extend any models
Base = declarative_base()


def enter_test_mode(test_engine):
    """
    Enter test mode with the provided test engine.
    This prevents any production database access during tests.
    """
    global IS_TEST_MODE, TEST_ENGINE, TEST_SESSION_LOCAL  # pylint: disable=global-statement
    IS_TEST_MODE = True
    TEST_ENGINE = test_engine
    TEST_SESSION_LOCAL = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )


def exit_test_mode():
    """Exit test mode and return to production database access."""
    global IS_TEST_MODE, TEST_ENGINE, TEST_SESSION_LOCAL  # pylint: disable=global-statement
    IS_TEST_MODE = False
    TEST_ENGINE = None
    TEST_SESSION_LOCAL = None


def get_engine():
    """
    Return the test engine in test mode, the production engine otherwise.
    """
    if IS_TEST_MODE:
        if TEST_ENGINE is None:
            raise RuntimeError("Test mode is active but no test engine is configured")
        return TEST_ENGINE

    _init_production_database()
    return PROD_ENGINE


def get_session_local():
    """Get the session factory for the current mode."""
    if IS_TEST_MODE:
        return TEST_SESSION_LOCAL
    _init_production_database()
    return PROD_SESSION_LOCAL


def get_db():
    """
    FastAPI dependency yielding a session that is closed after the request.
    """
    session_local = get_session_local()
    if session_local is None:
        raise RuntimeError("Test mode is active but no test session is configured")

    db = session_local()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    """Create every mapped table that does not exist yet."""
    # Import models so that their tables are registered on Base.metadata
    from bilemo.persistence import models  # noqa: F401  pylint: disable=import-outside-toplevel

    Base.metadata.create_all(bind=get_engine())
