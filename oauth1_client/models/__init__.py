"""
Data models for the OAuth 1.0a flow.
"""

from .oauth_models import (
    AccessToken,
    Credentials,
    FlowState,
    HttpResponse,
    OAuth1Endpoints,
    SignatureParameters,
    SignedRequest,
    TemporaryCredentials,
)

__all__ = [
    'AccessToken',
    'Credentials',
    'FlowState',
    'HttpResponse',
    'OAuth1Endpoints',
    'SignatureParameters',
    'SignedRequest',
    'TemporaryCredentials',
]
