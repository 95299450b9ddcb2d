"""
Tests for bilemo/config/config.py.
"""

from unittest.mock import patch

from bilemo.config import config


class TestApplyDefaults:
    """Tests for _apply_defaults."""

    def test_empty_config(self):
        """Test an empty file yields a complete configuration."""
        the_config = config._apply_defaults({})

        assert the_config["pagination"] == {
            "default_page": 1,
            "default_limit": 2,
            "max_limit": 100,
        }
        assert the_config["database"]["user"] == "sqlite"
        assert the_config["security"]["jwt_algorithm"] == "HS256"
        assert the_config["cache"]["enabled"] is True
        assert the_config["i18n"]["language"] == "en"
        assert the_config["cors"]["additional_origins"] == []

    def test_values_kept(self):
        """Test explicit settings are not overwritten."""
        the_config = config._apply_defaults(
            {"pagination": {"default_limit": 10}, "cache": {"enabled": False}}
        )

        assert the_config["pagination"]["default_limit"] == 10
        assert the_config["pagination"]["max_limit"] == 100
        assert the_config["cache"]["enabled"] is False

    def test_null_section(self):
        """Test a section left empty in YAML is filled."""
        the_config = config._apply_defaults({"logging": None})

        assert the_config["logging"]["level"] == "INFO|WARNING|ERROR|CRITICAL"


class TestAccessors:
    """Tests for the accessor functions."""

    def test_accessors_read_loaded_config(self):
        """Test each accessor reads its section."""
        loaded = config._apply_defaults(
            {"i18n": {"language": "fr"}, "logging": {"file": "/tmp/bilemo.log"}}
        )

        with patch.object(config, "config", loaded):
            assert config.get_config() is loaded
            assert config.get_language() == "fr"
            assert config.get_log_file() == "/tmp/bilemo.log"
            assert config.get_log_levels() == "INFO|WARNING|ERROR|CRITICAL"


class TestDatabaseUrl:
    """Tests for the database URL built from the configuration."""

    def test_sqlite_default(self, monkeypatch):
        """Test the default settings use a SQLite file."""
        from bilemo.persistence.db import build_database_url

        monkeypatch.delenv("DATABASE_URL", raising=False)
        db_config = config._apply_defaults({})["database"]

        assert build_database_url(db_config) == "sqlite:///bilemo.db"

    def test_postgresql(self, monkeypatch):
        """Test a host selects PostgreSQL."""
        from bilemo.persistence.db import build_database_url

        monkeypatch.delenv("DATABASE_URL", raising=False)
        db_config = {
            "user": "bilemo",
            "password": "pw",
            "host": "db",
            "port": 5432,
            "name": "bilemo",
        }

        assert build_database_url(db_config) == "postgresql://bilemo:pw@db:5432/bilemo"

    def test_environment_wins(self, monkeypatch):
        """Test DATABASE_URL overrides the file."""
        from bilemo.persistence.db import build_database_url

        monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")

        assert build_database_url({}) == "sqlite:///other.db"
