from __future__ import annotations

import json

import pytest

from featurepulse.config.sdk_config import DEFAULT_BASE_URL, ENV_VARS, SDKConfig


@pytest.fixture
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_defaults():
    config = SDKConfig()

    assert config.api_key == ""
    assert config.base_url == DEFAULT_BASE_URL
    assert config.bundle_id == "unknown"
    assert config.request_timeout == 30.0
    assert config.session_timeout_seconds == 1800
    assert config.default_lifetime_months == 24
    assert config.storage_path is None


def test_normalized_base_url_strips_trailing_slash():
    assert SDKConfig(base_url=" https://example.test/ ").normalized_base_url == "https://example.test"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": "   "},
        {"bundle_id": ""},
        {"request_timeout": 0},
        {"session_timeout_seconds": -1},
        {"default_lifetime_months": 0},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        SDKConfig(**kwargs)


def test_from_dict_fills_missing_with_defaults():
    config = SDKConfig.from_dict({"api_key": "k", "request_timeout": "12.5"})

    assert config.api_key == "k"
    assert config.request_timeout == 12.5
    assert config.base_url == DEFAULT_BASE_URL


def test_from_dict_empty_is_default():
    assert SDKConfig.from_dict({}) == SDKConfig()
    assert SDKConfig.from_dict(None) == SDKConfig()


def test_from_file(tmp_path):
    path = tmp_path / "featurepulse.json"
    path.write_text(json.dumps({
        "api_key": "file-key",
        "bundle_id": "com.example.app",
        "storage_path": "state.json",
    }), encoding="utf-8")

    config = SDKConfig.from_file(path)

    assert config.api_key == "file-key"
    assert config.bundle_id == "com.example.app"
    assert config.storage_path == "state.json"


def test_from_file_rejects_non_object(tmp_path):
    path = tmp_path / "featurepulse.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        SDKConfig.from_file(path)


def test_from_env_reads_dotenv_file(tmp_path, clean_env):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "FEATUREPULSE_API_KEY=env-key\n"
        "FEATUREPULSE_BASE_URL=https://staging.example.test\n"
        "FEATUREPULSE_REQUEST_TIMEOUT=5\n",
        encoding="utf-8",
    )

    config = SDKConfig.from_env(env_file)

    assert config.api_key == "env-key"
    assert config.base_url == "https://staging.example.test"
    assert config.request_timeout == 5.0


def test_process_env_wins_over_dotenv(tmp_path, clean_env):
    env_file = tmp_path / ".env"
    env_file.write_text("FEATUREPULSE_API_KEY=from-file\n", encoding="utf-8")
    clean_env.setenv("FEATUREPULSE_API_KEY", "from-process")

    assert SDKConfig.from_env(env_file).api_key == "from-process"
