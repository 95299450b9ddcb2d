"""
This module encapsulates the reading and processing of the config file
/etc/bilemo.yaml and provides callers with a mechanism to access the
various properties specified therein.
"""

import os
import sys

import yaml

# Read/validate the configuration file
# Check for system config first, then fall back to development config
if os.name == "nt":  # Windows
    CONFIG_PATH = r"C:\ProgramData\BileMo\bilemo.yaml"
else:  # Unix-like (Linux, macOS, BSD)
    CONFIG_PATH = "/etc/bilemo.yaml"

# Fallback to development config if system config doesn't exist
# Check for bilemo-dev.yaml first (user's local config), then .example
if not os.path.exists(CONFIG_PATH):
    if os.path.exists("bilemo-dev.yaml"):
        CONFIG_PATH = "bilemo-dev.yaml"
    elif os.path.exists("bilemo-dev.yaml.example"):
        CONFIG_PATH = "bilemo-dev.yaml.example"


def _apply_defaults(the_config: dict) -> dict:
    """
    Fill in every setting the YAML file leaves out.
    """
    for section in (
        "api",
        "database",
        "security",
        "pagination",
        "cache",
        "i18n",
        "logging",
        "cors",
    ):
        if not section in the_config.keys() or the_config[section] is None:
            the_config[section] = {}

    if not "host" in the_config["api"].keys():
        the_config["api"]["host"] = "localhost"
    if not "port" in the_config["api"].keys():
        the_config["api"]["port"] = 8000

    # Database settings, SQLite unless a host is given
    if not "user" in the_config["database"].keys():
        the_config["database"]["user"] = "sqlite"
    if not "password" in the_config["database"].keys():
        the_config["database"][
            "password"
        ] = ""  # nosec B105 - empty default, not a hardcoded password
    if not "host" in the_config["database"].keys():
        the_config["database"]["host"] = ""
    if not "port" in the_config["database"].keys():
        the_config["database"]["port"] = 5432
    if not "name" in the_config["database"].keys():
        the_config["database"]["name"] = "bilemo.db"

    # JWT settings
    if not "jwt_secret" in the_config["security"].keys():
        the_config["security"][
            "jwt_secret"
        ] = "change-me"  # nosec B105 - development default, overridden in production
    if not "jwt_algorithm" in the_config["security"].keys():
        the_config["security"]["jwt_algorithm"] = "HS256"
    if not "jwt_auth_timeout" in the_config["security"].keys():
        the_config["security"]["jwt_auth_timeout"] = 3600

    # Pagination settings
    if not "default_page" in the_config["pagination"].keys():
        the_config["pagination"]["default_page"] = 1
    if not "default_limit" in the_config["pagination"].keys():
        the_config["pagination"]["default_limit"] = 2
    if not "max_limit" in the_config["pagination"].keys():
        the_config["pagination"]["max_limit"] = 100

    if not "enabled" in the_config["cache"].keys():
        the_config["cache"]["enabled"] = True

    if not "language" in the_config["i18n"].keys():
        the_config["i18n"]["language"] = "en"

    # Logging settings
    if not "level" in the_config["logging"].keys():
        the_config["logging"]["level"] = "INFO|WARNING|ERROR|CRITICAL"
    if not "format" in the_config["logging"].keys():
        the_config["logging"][
            "format"
        ] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if not "additional_origins" in the_config["cors"].keys():
        the_config["cors"]["additional_origins"] = []

    return the_config


config = {}
try:
    if os.path.exists(CONFIG_PATH):
        with open(CONFIG_PATH, "r", encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}
    config = _apply_defaults(config)
except yaml.YAMLError as exc:
    if hasattr(exc, "problem_mark"):
        mark = exc.problem_mark
        print(
            f"Error reading {CONFIG_PATH} on line {mark.line+1} in column {mark.column+1}",
            file=sys.stderr,
        )
    sys.exit(1)


def get_config():
    """
    This function allows a caller to retrieve the config object.
    """
    return config


def get_pagination_config():
    """
    Get the default page, default limit and maximum limit for list endpoints.
    """
    return config["pagination"]


def is_cache_enabled():
    """
    Check if list pages should be served from the cache.
    """
    return config["cache"]["enabled"]


def get_language():
    """
    Get the language used for API messages.
    """
    return config["i18n"]["language"]


def get_log_levels():
    """
    Get the pipe-separated logging levels configuration.
    """
    return config["logging"]["level"]


def get_log_format():
    """
    Get the logging format string.
    """
    return config["logging"]["format"]


def get_log_file():
    """
    Get the log file path if specified.
    """
    return config["logging"].get("file")
