"""
OAuth 1.0a Client
-----------------
Three-legged OAuth 1.0a authorization with HMAC-SHA1 request signing.
"""

__version__ = "1.0.0"

from .core import (
    AiohttpTransport,
    AuthorizationRequest,
    ConfigurationMissing,
    ConsolePresenter,
    FlowInProgress,
    FlowStateError,
    MalformedResponse,
    NetworkFailure,
    OAuth1Error,
    OAuth1Flow,
    TokenMismatch,
    UnexpectedStatus,
    UserCancelled,
)
from .models import AccessToken, Credentials, FlowState, OAuth1Endpoints
from .platforms import TwitterOAuth

__all__ = [
    'AccessToken',
    'AiohttpTransport',
    'AuthorizationRequest',
    'ConfigurationMissing',
    'ConsolePresenter',
    'Credentials',
    'FlowInProgress',
    'FlowState',
    'FlowStateError',
    'MalformedResponse',
    'NetworkFailure',
    'OAuth1Endpoints',
    'OAuth1Error',
    'OAuth1Flow',
    'TokenMismatch',
    'TwitterOAuth',
    'UnexpectedStatus',
    'UserCancelled',
]
