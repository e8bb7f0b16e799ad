import logging
import pytest
from oauth1_client.config import Settings, get_settings
from oauth1_client.core.errors import ConfigurationMissing
from oauth1_client.models import Credentials
from oauth1_client.utils.logger import get_logger, mask

CREDENTIAL_VARS = ["TWITTER_CONSUMER_KEY", "TWITTER_CONSUMER_SECRET", "TWITTER_CALLBACK_URL"]

@pytest.fixture
def clean_env(monkeypatch):
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()

def test_credentials_from_environment(clean_env):
    clean_env.setenv("TWITTER_CONSUMER_KEY", "ck")
    clean_env.setenv("TWITTER_CONSUMER_SECRET", "cs")
    clean_env.setenv("TWITTER_CALLBACK_URL", "myapp://")

    settings = Settings(_env_file=None)

    assert settings.credentials == Credentials(consumer_key="ck", consumer_secret="cs", callback_uri="myapp://")
    assert settings.missing_credentials == []

def test_missing_credentials_are_named(clean_env):
    clean_env.setenv("TWITTER_CONSUMER_KEY", "ck")

    settings = Settings(_env_file=None)

    with pytest.raises(ConfigurationMissing) as excinfo:
        settings.credentials
    assert excinfo.value.missing == ["TWITTER_CONSUMER_SECRET", "TWITTER_CALLBACK_URL"]
    assert "TWITTER_CALLBACK_URL" in str(excinfo.value)

def test_default_endpoints_and_timeouts(clean_env):
    settings = Settings(_env_file=None)

    assert settings.endpoints.request_token_url == "https://api.twitter.com/oauth/request_token"
    assert settings.endpoints.access_token_url == "https://api.twitter.com/oauth/access_token"
    assert settings.HTTP_TIMEOUT == 30.0
    assert settings.AUTHORIZATION_TIMEOUT == 300.0

def test_get_settings_is_cached(clean_env):
    assert get_settings() is get_settings()

def test_secret_not_in_repr():
    credentials = Credentials(consumer_key="ck", consumer_secret="very-secret", callback_uri="myapp://")
    assert "very-secret" not in repr(credentials)

def test_get_logger_configures_once():
    logger = get_logger("oauth1_client.tests.logger")
    handlers = list(logger.handlers)

    assert handlers
    assert get_logger("oauth1_client.tests.logger").handlers == handlers
    assert logger.level != logging.NOTSET

@pytest.mark.parametrize("value, expected", [
    (None, "<empty>"),
    ("", "<empty>"),
    ("short", "***"),
    ("370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb", "37077...eJAEb"),
])
def test_mask(value, expected):
    assert mask(value) == expected
