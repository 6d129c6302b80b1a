import pytest
from harvest_sdk.client import HarvestClient, create_client_from_env
from harvest_sdk.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, load_env_config
from harvest_sdk.errors import ConfigurationError
from harvest_sdk.request_builder import DEFAULT_USER_AGENT

ENV_VARS = (
    "HARVEST_ACCESS_TOKEN",
    "HARVEST_ACCOUNT_ID",
    "HARVEST_BASE_URL",
    "HARVEST_USER_AGENT",
    "HARVEST_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_env_empty():
    settings = load_env_config(use_dotenv=False)
    assert settings.access_token == ""
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS


def test_env_values_are_read(monkeypatch):
    monkeypatch.setenv("HARVEST_ACCESS_TOKEN", " tok ")
    monkeypatch.setenv("HARVEST_ACCOUNT_ID", "42")
    monkeypatch.setenv("HARVEST_BASE_URL", "https://example.test/v2")
    monkeypatch.setenv("HARVEST_TIMEOUT_SECONDS", "2.5")

    settings = load_env_config(use_dotenv=False)

    assert settings.access_token == "tok"
    assert settings.account_id == "42"
    assert settings.base_url == "https://example.test/v2"
    assert settings.timeout_seconds == 2.5


def test_bad_timeout_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("HARVEST_TIMEOUT_SECONDS", "soon")
    assert load_env_config(use_dotenv=False).timeout_seconds == DEFAULT_TIMEOUT_SECONDS


def test_create_client_from_env_requires_credentials(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigurationError):
        create_client_from_env()


def test_create_client_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HARVEST_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("HARVEST_ACCOUNT_ID", "42")
    monkeypatch.setenv("HARVEST_BASE_URL", "https://example.test/v2/")

    client = create_client_from_env()

    assert isinstance(client, HarvestClient)
    assert client.base_url == "https://example.test/v2"


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)
