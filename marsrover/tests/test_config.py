"""
Tests for environment-driven settings.
"""

from ..api import create_app
from ..application import GameService
from ..config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("MARSROVER_ENV", "MARSROVER_LOG_LEVEL", "MARSROVER_ROVER_NAME_PREFIX", "ALLOWED_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.env == "development"
        assert not settings.is_production
        assert settings.log_level == "INFO"
        assert settings.rover_name_prefix == "ROVER_"
        assert settings.allowed_origins == ["*"]

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MARSROVER_ENV", "production")
        monkeypatch.setenv("MARSROVER_LOG_LEVEL", "debug")
        monkeypatch.setenv("MARSROVER_ROVER_NAME_PREFIX", "R")
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test,")

        settings = Settings.from_env()

        assert settings.is_production
        assert settings.log_level == "DEBUG"
        assert settings.rover_name_prefix == "R"
        assert settings.allowed_origins == ["http://a.test", "http://b.test"]


class TestDocsByEnvironment:

    def test_docs_served_in_development(self):
        from fastapi.testclient import TestClient

        client = TestClient(create_app(GameService(), settings=Settings()))
        assert client.get("/api/docs").status_code == 200

    def test_docs_hidden_in_production(self):
        from fastapi.testclient import TestClient

        client = TestClient(create_app(GameService(), settings=Settings(env="production")))
        assert client.get("/api/docs").status_code == 404
        assert client.get("/api/v1/health").status_code == 200
