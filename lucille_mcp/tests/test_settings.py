import pytest
from pydantic import ValidationError

from lucille_mcp.config.settings import DEFAULT_API_URL, Settings


def test_default_api_url(monkeypatch, tmp_path):
    monkeypatch.delenv("LUCILLE_CONFIG_FILE", raising=False)
    monkeypatch.delenv("LUCILLE_API_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    cfg = Settings(_env_file=None)
    assert cfg.lucille_api_url == DEFAULT_API_URL
    assert cfg.http_timeout is None


def test_env_override_strips_trailing_slash(monkeypatch, tmp_path):
    monkeypatch.delenv("LUCILLE_CONFIG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LUCILLE_API_URL", "http://localhost:3000/api/brain/")
    cfg = Settings(_env_file=None)
    assert cfg.lucille_api_url == "http://localhost:3000/api/brain"


def test_rejects_non_http_url(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LUCILLE_API_URL", "ftp://example.com")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_yaml_config_file(monkeypatch, tmp_path):
    monkeypatch.delenv("LUCILLE_API_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    cfg_file = tmp_path / "lucille.yaml"
    cfg_file.write_text("lucille_api_url: https://staging.example/api/brain\nhttp_timeout: 5\n", encoding="utf-8")
    monkeypatch.setenv("LUCILLE_CONFIG_FILE", str(cfg_file))
    cfg = Settings(_env_file=None)
    assert cfg.lucille_api_url == "https://staging.example/api/brain"
    assert cfg.http_timeout == 5.0


def test_env_beats_yaml(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("lucille_api_url: https://yaml.example\n", encoding="utf-8")
    monkeypatch.delenv("LUCILLE_CONFIG_FILE", raising=False)
    monkeypatch.setenv("LUCILLE_API_URL", "https://env.example")
    assert Settings(_env_file=None).lucille_api_url == "https://env.example"
