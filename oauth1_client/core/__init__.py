"""
Core OAuth 1.0a functionality.
"""

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
from .flow import AuthorizationRequest, OAuth1Flow
from .presenter import AuthorizationPresenter, ConsolePresenter
from .transport import AiohttpTransport, HttpTransport

__all__ = [
    'AiohttpTransport',
    'AuthorizationPresenter',
    'AuthorizationRequest',
    'ConfigurationMissing',
    'ConsolePresenter',
    'FlowInProgress',
    'FlowStateError',
    'HttpTransport',
    'MalformedResponse',
    'NetworkFailure',
    'OAuth1Error',
    'OAuth1Flow',
    'TokenMismatch',
    'UnexpectedStatus',
    'UserCancelled',
]
