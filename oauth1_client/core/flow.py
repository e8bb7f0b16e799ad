"""
Three-legged OAuth 1.0a flow.

One ``OAuth1Flow`` runs one authorization attempt at a time::

    IDLE -> REQUESTING_TEMPORARY_CREDENTIALS -> AWAITING_USER_AUTHORIZATION
         -> EXCHANGING_ACCESS_TOKEN -> COMPLETE

with ``FAILED`` reachable from every non-terminal state. Once an attempt is
``COMPLETE`` or ``FAILED`` the same flow may start a new one.
"""

import asyncio
import hmac
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Tuple
from urllib.parse import urlencode, urlsplit

from .errors import (
    ConfigurationMissing,
    FlowInProgress,
    FlowStateError,
    MalformedResponse,
    NetworkFailure,
    OAuth1Error,
    TokenMismatch,
    UnexpectedStatus,
    UserCancelled,
)
from .presenter import AuthorizationPresenter
from .responses import parse_access_token, parse_callback, parse_temporary_credentials
from .signature import generate_nonce, generate_timestamp, oauth_parameters, sign_request
from .transport import AiohttpTransport, HttpTransport
from ..models import (
    AccessToken,
    Credentials,
    FlowState,
    OAuth1Endpoints,
    SignatureParameters,
    SignedRequest,
    TemporaryCredentials,
)
from ..utils.logger import get_logger, mask

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthorizationRequest:
    """Result of the first leg: where to send the user, and how to finish."""
    authorization_url: str
    request_token: str
    flow: "OAuth1Flow" = field(repr=False, compare=False)

    async def complete(self, redirect_url: str) -> AccessToken:
        return await self.flow.complete_authorization(redirect_url)

    def cancel(self, reason: str = "authorization cancelled") -> None:
        self.flow.cancel_authorization(reason)


class OAuth1Flow:
    """OAuth 1.0a three-legged authorization against one provider."""

    # Used to tag log lines
    platform_name = "oauth1"

    def __init__(self, credentials: Credentials, endpoints: OAuth1Endpoints,
                 transport: Optional[HttpTransport] = None,
                 nonce_factory: Callable[[], str] = generate_nonce,
                 clock: Callable[[], str] = generate_timestamp):
        """
        Args:
            credentials: Consumer key, consumer secret and callback URI
            endpoints: Request-token, authorize and access-token URLs
            transport: HTTP transport, aiohttp when omitted
            nonce_factory: Produces a fresh nonce per request
            clock: Produces the timestamp per request

        Raises:
            ConfigurationMissing: if any credential is empty
        """
        missing = [
            name for name in ("consumer_key", "consumer_secret", "callback_uri")
            if not getattr(credentials, name)
        ]
        if missing:
            logger.error(f"Cannot create OAuth 1.0a flow, missing: {missing}")
            raise ConfigurationMissing(missing)

        self.credentials = credentials
        self.endpoints = endpoints
        self.transport = transport or AiohttpTransport()
        self._nonce_factory = nonce_factory
        self._clock = clock

        self._state = FlowState.IDLE
        self._temporary: Optional[TemporaryCredentials] = None
        self.error: Optional[OAuth1Error] = None

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def callback_scheme(self) -> str:
        return urlsplit(self.credentials.callback_uri).scheme

    def _transition(self, state: FlowState) -> None:
        logger.debug(f"[{self.platform_name}] {self._state.value} -> {state.value}")
        self._state = state

    def _fail(self, error: OAuth1Error) -> None:
        logger.error(f"[{self.platform_name}] Authorization failed in state {self._state.value}: {error}")
        self.error = error
        self._temporary = None
        self._transition(FlowState.FAILED)

    def _oauth_parameters(self, **extra: str) -> SignatureParameters:
        return oauth_parameters(
            self.credentials.consumer_key,
            nonce=self._nonce_factory(),
            timestamp=self._clock(),
            **extra,
        )

    async def _post(self, url: str, params: SignatureParameters,
                    token_secret: Optional[str] = None) -> str:
        request = sign_request("POST", url, params, self.credentials.consumer_secret, token_secret)
        try:
            response = await self.transport.send(request.method, request.url, request.headers, request.body)
        except OAuth1Error:
            raise
        except Exception as e:
            raise NetworkFailure(f"POST {url} failed: {type(e).__name__}: {e}", cause=e) from e

        if not response.ok:
            logger.error(f"POST {url} returned {response.status_code}: {response.body[:200]}")
            raise UnexpectedStatus(response.status_code, response.body)
        return response.body

    async def _request_temporary_credentials(self) -> TemporaryCredentials:
        params = self._oauth_parameters(oauth_callback=self.credentials.callback_uri)
        body = await self._post(self.endpoints.request_token_url, params)
        temporary = parse_temporary_credentials(body)
        if not temporary.callback_confirmed:
            logger.warning("Provider did not confirm oauth_callback")
        logger.debug(f"Obtained request token {mask(temporary.request_token)}")
        return temporary

    async def _exchange_access_token(self, temporary: TemporaryCredentials, verifier: str) -> AccessToken:
        params = self._oauth_parameters(
            oauth_token=temporary.request_token,
            oauth_verifier=verifier,
        )
        body = await self._post(self.endpoints.access_token_url, params, temporary.request_token_secret)
        token = parse_access_token(body)
        logger.debug(f"Obtained access token {mask(token.token)}, has secret: {bool(token.token_secret)}")
        return token

    def authorization_url(self, request_token: str, **authorize_params: str) -> str:
        """URL of the provider's authorization page for ``request_token``."""
        query = urlencode([("oauth_token", request_token)] + list(authorize_params.items()))
        separator = "&" if "?" in self.endpoints.authorize_url else "?"
        return f"{self.endpoints.authorize_url}{separator}{query}"

    async def begin_authorization(self, **authorize_params: str) -> AuthorizationRequest:
        """
        Obtain temporary credentials and build the authorization URL.

        Args:
            **authorize_params: Extra query parameters for the authorization
                page (e.g. ``force_login="true"``)

        Returns:
            AuthorizationRequest with the URL to present and a completion handle

        Raises:
            FlowInProgress: if an attempt is already running on this flow
            NetworkFailure, UnexpectedStatus, MalformedResponse
        """
        if self._state.in_flight:
            raise FlowInProgress(f"Authorization already in progress ({self._state.value})")

        logger.info(f"[{self.platform_name}] Starting OAuth 1.0a authorization")
        self._temporary = None
        self.error = None
        self._transition(FlowState.REQUESTING_TEMPORARY_CREDENTIALS)
        try:
            temporary = await self._request_temporary_credentials()
        except OAuth1Error as e:
            self._fail(e)
            raise
        except BaseException as e:
            self._fail(OAuth1Error(f"Request token step aborted: {type(e).__name__}"))
            raise

        self._temporary = temporary
        self._transition(FlowState.AWAITING_USER_AUTHORIZATION)
        return AuthorizationRequest(
            authorization_url=self.authorization_url(temporary.request_token, **authorize_params),
            request_token=temporary.request_token,
            flow=self,
        )

    def _verify_callback(self, redirect_url: str, temporary: TemporaryCredentials) -> str:
        query = parse_callback(redirect_url)
        if "denied" in query:
            raise UserCancelled("user denied authorization")

        received = query.get("oauth_token")
        if not received:
            raise MalformedResponse("Callback URL is missing oauth_token")
        if not hmac.compare_digest(received.encode("utf-8"), temporary.request_token.encode("utf-8")):
            raise TokenMismatch(temporary.request_token, received)

        verifier = query.get("oauth_verifier")
        if not verifier:
            raise MalformedResponse("Callback URL is missing oauth_verifier")
        return verifier

    async def complete_authorization(self, redirect_url: str) -> AccessToken:
        """
        Verify the callback and exchange the request token for an access token.

        Args:
            redirect_url: URL the provider redirected the user agent to

        Returns:
            AccessToken

        Raises:
            FlowStateError: if no attempt is awaiting user authorization
            UserCancelled, TokenMismatch, MalformedResponse, NetworkFailure,
            UnexpectedStatus
        """
        if self._state is not FlowState.AWAITING_USER_AUTHORIZATION:
            raise FlowStateError(f"Cannot complete authorization in state {self._state.value}")

        temporary = self._temporary
        try:
            verifier = self._verify_callback(redirect_url, temporary)
        except OAuth1Error as e:
            self._fail(e)
            raise

        self._transition(FlowState.EXCHANGING_ACCESS_TOKEN)
        try:
            token = await self._exchange_access_token(temporary, verifier)
        except OAuth1Error as e:
            self._fail(e)
            raise
        except BaseException as e:
            self._fail(OAuth1Error(f"Access token step aborted: {type(e).__name__}"))
            raise

        self._temporary = None
        self._transition(FlowState.COMPLETE)
        logger.info(f"[{self.platform_name}] Authorization complete")
        return token

    def cancel_authorization(self, reason: str = "authorization cancelled") -> None:
        """Abandon the attempt that is waiting for the user."""
        if self._state is not FlowState.AWAITING_USER_AUTHORIZATION:
            raise FlowStateError(f"Nothing to cancel in state {self._state.value}")
        self._fail(UserCancelled(reason))

    async def authorize(self, presenter: AuthorizationPresenter, timeout: Optional[float] = None,
                        **authorize_params: str) -> AccessToken:
        """
        Run the whole flow, letting ``presenter`` handle the user step.

        Args:
            presenter: Shows the authorization URL and returns the redirect URL
            timeout: Seconds to wait for the user, unbounded when ``None``
            **authorize_params: Extra query parameters for the authorization page

        Raises:
            UserCancelled: if the user step is cancelled, denied, fails or times out
        """
        request = await self.begin_authorization(**authorize_params)
        try:
            redirect_url = await asyncio.wait_for(
                presenter.present(request.authorization_url, self.callback_scheme),
                timeout,
            )
        except UserCancelled as e:
            self._fail(e)
            raise
        except asyncio.TimeoutError:
            error = UserCancelled(f"authorization not completed within {timeout} seconds")
            self._fail(error)
            raise error from None
        except asyncio.CancelledError:
            self._fail(UserCancelled("authorization task cancelled"))
            raise
        except Exception as e:
            error = UserCancelled(f"authorization presenter failed: {e}")
            self._fail(error)
            raise error from e

        if redirect_url is None:
            error = UserCancelled("authorization cancelled by user")
            self._fail(error)
            raise error
        return await self.complete_authorization(redirect_url)

    def sign_api_request(self, method: str, url: str, access_token: AccessToken,
                         body_params: Optional[Iterable[Tuple[str, str]]] = None) -> SignedRequest:
        """Sign a protected-resource request with an access token."""
        params = self._oauth_parameters(oauth_token=access_token.token)
        return sign_request(
            method, url, params,
            self.credentials.consumer_secret,
            access_token.token_secret,
            body_params,
        )

    @classmethod
    def from_settings(cls, settings=None, transport: Optional[HttpTransport] = None, **kwargs):
        """
        Build a flow from ``Settings``.

        Raises:
            ConfigurationMissing: if a consumer credential is not configured
        """
        from ..config import get_settings

        settings = settings or get_settings()
        return cls(
            settings.credentials,
            settings.endpoints,
            transport=transport or AiohttpTransport(timeout=settings.HTTP_TIMEOUT),
            **kwargs,
        )
