"""
Errors raised by the OAuth 1.0a flow.

Every error other than ``ConfigurationMissing`` is recoverable: the caller may
start a fresh attempt, which regenerates nonce and timestamp.
"""

from typing import Iterable, Optional


class OAuth1Error(Exception):
    """Base class for all OAuth 1.0a errors."""


class ConfigurationMissing(OAuth1Error):
    """A required credential is absent. Raised at construction."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required OAuth configuration: {', '.join(self.missing)}")


class NetworkFailure(OAuth1Error):
    """The transport could not complete the request."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class UnexpectedStatus(OAuth1Error):
    """The provider answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Unexpected HTTP status {status_code}: {body[:200]}")


class MalformedResponse(OAuth1Error):
    """A response body or callback URL is unparseable or lacks a required field."""

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class TokenMismatch(OAuth1Error):
    """The token returned on callback is not the temporary token on file."""

    def __init__(self, expected: str, received: str):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Callback oauth_token {_short(received)} does not match "
            f"request token {_short(expected)}"
        )


class UserCancelled(OAuth1Error):
    """The authorization step was aborted, denied or timed out."""

    def __init__(self, reason: str = "authorization cancelled"):
        self.reason = reason
        super().__init__(reason)


class FlowStateError(OAuth1Error):
    """An operation was invoked in a state that does not allow it."""


class FlowInProgress(FlowStateError):
    """An authorization attempt is already in flight on this flow."""


def _short(token: str) -> str:
    return f"{token[:4]}..." if token and len(token) > 8 else "***"
