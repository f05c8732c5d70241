"""Tests for settings, the user .env helpers and logging setup."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from hetznercloud.adapters.http_client import build_client, build_headers
from hetznercloud.core import config
from hetznercloud.core.config import DEFAULT_API_URL, AppSettings, write_user_env_vars
from hetznercloud.core.logger import get_logger, setup_logging


@pytest.fixture
def user_config_dir(tmp_path, monkeypatch):
    target = tmp_path / "cfg"
    monkeypatch.setattr(config, "get_user_config_dir", lambda: target)
    return target


class TestAppSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HCLOUD_API_TOKEN", raising=False)
        monkeypatch.delenv("HCLOUD_API_URL", raising=False)

        settings = AppSettings(_env_file=None)

        assert settings.api_token is None
        assert settings.api_url == DEFAULT_API_URL
        assert settings.http_timeout_seconds == 30.0
        assert settings.log_format == "console"

    def test_reads_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("HCLOUD_API_TOKEN", "env-token")
        monkeypatch.setenv("HCLOUD_HTTP_TIMEOUT_SECONDS", "5")

        settings = AppSettings(_env_file=None)

        assert settings.api_token == "env-token"
        assert settings.http_timeout_seconds == 5.0

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, http_timeout_seconds=0)

    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("HCLOUD_API_TOKEN", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("HCLOUD_API_TOKEN=file-token\n", encoding="utf-8")

        settings = AppSettings(_env_file=str(env_file))

        assert settings.api_token == "file-token"


class TestUserEnvFile:
    def test_write_creates_file(self, user_config_dir):
        path = write_user_env_vars({"HCLOUD_API_TOKEN": "abc"})

        assert path == user_config_dir / ".env"
        assert "HCLOUD_API_TOKEN=abc" in path.read_text(encoding="utf-8")

    def test_write_merges_and_skips_none(self, user_config_dir):
        write_user_env_vars({"HCLOUD_API_TOKEN": "abc", "HCLOUD_API_URL": "http://x"})
        path = write_user_env_vars({"HCLOUD_API_TOKEN": "new", "HCLOUD_API_URL": None})

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("#")
        assert lines[1:] == ["HCLOUD_API_TOKEN=new", "HCLOUD_API_URL=http://x"]


class TestHttpClient:
    def test_headers(self):
        settings = AppSettings(_env_file=None, user_agent="ua/1")

        assert build_headers("tok", settings) == {
            "Authorization": "Bearer tok",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "ua/1",
        }

    def test_client_uses_settings(self):
        settings = AppSettings(_env_file=None, api_url="https://example.test/v1/", http_timeout_seconds=7)

        with build_client("tok", settings) as client:
            assert str(client.base_url) == "https://example.test/v1/"
            assert client.timeout.read == 7
            assert client.headers["Authorization"] == "Bearer tok"


class TestLogging:
    def test_request_events_are_logged_at_debug(self, api, fake, caplog):
        setup_logging("DEBUG", "json")
        fake.add("GET", "/isos", fixture="isos")

        with caplog.at_level(logging.DEBUG, logger="hetznercloud.adapters.cloud_api"):
            api.get_isos()

        messages = "\n".join(r.getMessage() for r in caplog.records)
        assert "hcloud.request" in messages
        assert "hcloud.response" in messages
        assert "test-token" not in messages

    def test_get_logger_without_setup(self):
        log = get_logger("hetznercloud.tests")

        log.debug("quiet")  # must not raise when nothing is configured
