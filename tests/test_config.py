# tests/test_config.py
import httpx
import pytest
from fastapi import HTTPException

import main
from core import config, http


@pytest.mark.parametrize("value", [None, "", "   "])
def test_require_github_token_rejects_missing_or_blank(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("GITHUB_ACCESS_TOKEN", raising=False)
    else:
        monkeypatch.setenv("GITHUB_ACCESS_TOKEN", value)

    with pytest.raises(config.ConfigError):
        config.require_github_token()


def test_require_github_token_strips(monkeypatch):
    monkeypatch.setenv("GITHUB_ACCESS_TOKEN", "  ghp_abc \n")

    assert config.require_github_token() == "ghp_abc"


def test_github_token_dependency_maps_to_500(monkeypatch):
    monkeypatch.delenv("GITHUB_ACCESS_TOKEN", raising=False)

    with pytest.raises(HTTPException) as exc_info:
        config.github_token()

    assert exc_info.value.status_code == 500


def test_cache_file_default_and_override(monkeypatch):
    monkeypatch.delenv("BOOKMARKS_CACHE_FILE", raising=False)
    assert config.cache_file() == ".cache/bookmarks.json"

    monkeypatch.setenv("BOOKMARKS_CACHE_FILE", "/srv/cache/slot.json")
    assert config.cache_file() == "/srv/cache/slot.json"


@pytest.mark.parametrize(
    "raw, expected",
    [(None, None), ("", None), ("abc", None), ("0", None), ("-5", None), ("2.5", 2.5)],
)
def test_upstream_timeout(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("UPSTREAM_TIMEOUT_S", raising=False)
    else:
        monkeypatch.setenv("UPSTREAM_TIMEOUT_S", raw)

    assert config.upstream_timeout_s() == expected


def test_build_client_has_no_timeout_by_default(monkeypatch):
    monkeypatch.delenv("UPSTREAM_TIMEOUT_S", raising=False)

    client = http.build_client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    assert client.timeout == httpx.Timeout(None)
    assert client.headers["User-Agent"] == http.USER_AGENT


def test_cors_origins_parsing(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " http://a.test , ,http://b.test")

    assert config.cors_origins() == ["http://a.test", "http://b.test"]


def test_api_port_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("API_PORT", "eighty")

    assert config.api_port() == config.DEFAULT_PORT


def test_run_exits_nonzero_without_token(monkeypatch):
    monkeypatch.delenv("GITHUB_ACCESS_TOKEN", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        main.run()

    assert exc_info.value.code == 1
