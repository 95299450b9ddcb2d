"""
This module provides the main setup and entry point for the BileMo API
process.  It reads the bilemo.yaml configuration file, sets up logging and
CORS, registers the error handlers and routers and then launches the
application.
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bilemo.config import config
from bilemo.startup.cors_config import get_cors_origins
from bilemo.startup.exception_handlers import register_exception_handlers
from bilemo.startup.lifecycle import lifespan
from bilemo.startup.logging_config import configure_logging
from bilemo.startup.route_registration import register_routes
from bilemo.utils.verbosity_logger import get_logger

startup_logger = get_logger("bilemo.startup")

# Parse the /etc/bilemo.yaml file
app_config = config.get_config()

configure_logging()

app = FastAPI(title="BileMo API", lifespan=lifespan)

origins = get_cors_origins(app_config)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Authorization", "Location"],
)

register_exception_handlers(app, origins)
register_routes(app)


if __name__ == "__main__":
    startup_logger.info(
        "Starting uvicorn on %s:%s", app_config["api"]["host"], app_config["api"]["port"]
    )
    uvicorn.run(
        app,
        host=app_config["api"]["host"],
        port=app_config["api"]["port"],
    )
