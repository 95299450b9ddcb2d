"""
CORS origins for the BileMo API.
"""

from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.startup.cors")


def get_cors_origins(app_config: dict) -> list:
    """
    The API's own host and port, plus cors.additional_origins from the
    configuration.
    """
    host = app_config["api"]["host"]
    port = app_config["api"]["port"]
    origins = [
        f"http://{host}:{port}",
        f"http://localhost:{port}",
        f"http://127.0.0.1:{port}",
    ]
    origins.extend(app_config.get("cors", {}).get("additional_origins") or [])

    unique_origins = list(dict.fromkeys(origins))
    logger.info("CORS origins: %s", unique_origins)
    return unique_origins
