from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from dotenv import load_dotenv
from functools import lru_cache

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # OAuth 1.0a consumer credentials
    TWITTER_CONSUMER_KEY: Optional[str] = None
    TWITTER_CONSUMER_SECRET: Optional[str] = None
    TWITTER_CALLBACK_URL: Optional[str] = None

    # Provider endpoints
    TWITTER_REQUEST_TOKEN_URL: str = "https://api.twitter.com/oauth/request_token"
    TWITTER_AUTHORIZE_URL: str = "https://api.twitter.com/oauth/authorize"
    TWITTER_ACCESS_TOKEN_URL: str = "https://api.twitter.com/oauth/access_token"

    # Timeouts (seconds)
    HTTP_TIMEOUT: float = 30.0
    AUTHORIZATION_TIMEOUT: Optional[float] = 300.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: Optional[str] = None

    @property
    def missing_credentials(self) -> List[str]:
        """Names of the required credential variables that are unset or blank."""
        required = {
            "TWITTER_CONSUMER_KEY": self.TWITTER_CONSUMER_KEY,
            "TWITTER_CONSUMER_SECRET": self.TWITTER_CONSUMER_SECRET,
            "TWITTER_CALLBACK_URL": self.TWITTER_CALLBACK_URL,
        }
        return [name for name, value in required.items() if not value]

    @property
    def credentials(self):
        """
        Get the consumer credentials.

        Raises:
            ConfigurationMissing: if any required credential is absent
        """
        from .core.errors import ConfigurationMissing
        from .models import Credentials

        missing = self.missing_credentials
        if missing:
            raise ConfigurationMissing(missing)
        return Credentials(
            consumer_key=self.TWITTER_CONSUMER_KEY,
            consumer_secret=self.TWITTER_CONSUMER_SECRET,
            callback_uri=self.TWITTER_CALLBACK_URL,
        )

    @property
    def endpoints(self):
        """Get the provider endpoints."""
        from .models import OAuth1Endpoints

        return OAuth1Endpoints(
            request_token_url=self.TWITTER_REQUEST_TOKEN_URL,
            authorize_url=self.TWITTER_AUTHORIZE_URL,
            access_token_url=self.TWITTER_ACCESS_TOKEN_URL,
        )

# Create cached settings instance
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
