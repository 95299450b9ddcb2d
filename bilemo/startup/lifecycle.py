"""
Application lifespan: message catalogs are compiled and tables created at
startup, and the page cache is emptied at shutdown.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from bilemo import i18n
from bilemo.i18n.catalog import compile_catalogs
from bilemo.persistence.db import create_tables
from bilemo.services.cache_service import tag_aware_cache
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.startup.lifecycle")


@asynccontextmanager
async def lifespan(_fastapi_app: FastAPI):
    """
    Application lifespan manager to handle startup and shutdown events.
    """
    if compile_catalogs(i18n.LOCALE_DIR):
        # Catalogs loaded before compilation were empty fallbacks
        i18n.TRANSLATIONS.clear()

    logger.info("Creating database tables")
    create_tables()
    yield
    tag_aware_cache.clear()
    logger.info("Shutdown complete")
