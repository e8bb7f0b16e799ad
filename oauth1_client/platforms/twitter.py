from typing import Optional
from ..core.flow import OAuth1Flow
from ..core.transport import HttpTransport
from ..models import Credentials, OAuth1Endpoints
from ..utils.logger import get_logger

logger = get_logger(__name__)

TWITTER_ENDPOINTS = OAuth1Endpoints(
    request_token_url="https://api.twitter.com/oauth/request_token",
    authorize_url="https://api.twitter.com/oauth/authorize",
    access_token_url="https://api.twitter.com/oauth/access_token",
)

class TwitterOAuth(OAuth1Flow):
    """Twitter/X OAuth 1.0a (three-legged) sign-in."""

    platform_name = "twitter"

    def __init__(self, consumer_key: str, consumer_secret: str, callback_url: str,
                 transport: Optional[HttpTransport] = None,
                 endpoints: OAuth1Endpoints = TWITTER_ENDPOINTS, **kwargs):
        """
        Args:
            consumer_key: API key of the Twitter app
            consumer_secret: API key secret of the Twitter app
            callback_url: Callback registered for the app (e.g. ``myapp://``)
            transport: HTTP transport, aiohttp when omitted
            endpoints: Override the Twitter endpoints (e.g. a proxy)
        """
        super().__init__(
            Credentials(
                consumer_key=consumer_key or "",
                consumer_secret=consumer_secret or "",
                callback_uri=callback_url or "",
            ),
            endpoints,
            transport=transport,
            **kwargs,
        )
        logger.debug(f"Twitter OAuth 1.0a initialized with callback {callback_url}")

    @classmethod
    def from_settings(cls, settings=None, transport: Optional[HttpTransport] = None, **kwargs):
        """Build a Twitter flow from ``Settings``."""
        from ..config import get_settings
        from ..core.transport import AiohttpTransport

        settings = settings or get_settings()
        credentials = settings.credentials
        return cls(
            credentials.consumer_key,
            credentials.consumer_secret,
            credentials.callback_uri,
            transport=transport or AiohttpTransport(timeout=settings.HTTP_TIMEOUT),
            endpoints=settings.endpoints,
            **kwargs,
        )

    async def sign_in(self, presenter, timeout: Optional[float] = None, force_login: bool = False):
        """
        Sign a user in through ``presenter``.

        Args:
            presenter: Shows the authorization page and returns the redirect URL
            timeout: Seconds to wait for the user
            force_login: Ask Twitter to prompt for credentials even when a
                session exists

        Returns:
            AccessToken whose ``extra`` carries ``user_id`` and ``screen_name``
        """
        authorize_params = {"force_login": "true"} if force_login else {}
        token = await self.authorize(presenter, timeout=timeout, **authorize_params)
        logger.info(f"Twitter sign-in complete for {token.extra.get('screen_name', 'unknown user')}")
        return token
