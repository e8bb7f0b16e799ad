"""
Parsers for provider response bodies and the authorization callback URL.
"""

from typing import Dict
from urllib.parse import parse_qsl, urlsplit

from .encoding import parse_form_encoded
from .errors import MalformedResponse
from ..models import AccessToken, TemporaryCredentials


def _fields(body: str) -> Dict[str, str]:
    # First occurrence wins when a provider repeats a field
    fields: Dict[str, str] = {}
    for name, value in parse_form_encoded(body):
        fields.setdefault(name, value)
    return fields


def _require(fields: Dict[str, str], name: str, body: str) -> str:
    value = fields.get(name)
    if not value:
        raise MalformedResponse(f"Response is missing required field '{name}'", body)
    return value


def parse_temporary_credentials(body: str) -> TemporaryCredentials:
    """
    Parse the request-token response.

    Raises:
        MalformedResponse: if the body is not form-encoded or lacks
            ``oauth_token`` or ``oauth_token_secret``
    """
    fields = _fields(body)
    return TemporaryCredentials(
        request_token=_require(fields, "oauth_token", body),
        request_token_secret=_require(fields, "oauth_token_secret", body),
        callback_confirmed=fields.get("oauth_callback_confirmed", "").lower() == "true",
    )


def parse_access_token(body: str) -> AccessToken:
    """
    Parse the access-token response.

    ``oauth_token`` is required, ``oauth_token_secret`` is optional and every
    other field is kept in ``extra``.
    """
    fields = _fields(body)
    token = _require(fields, "oauth_token", body)
    token_secret = fields.get("oauth_token_secret") or None
    extra = {k: v for k, v in fields.items() if k not in ("oauth_token", "oauth_token_secret")}
    return AccessToken(token=token, token_secret=token_secret, extra=extra)


def parse_callback(redirect_url: str) -> Dict[str, str]:
    """Query parameters of the URL the user agent was redirected to."""
    if not redirect_url:
        raise MalformedResponse("Empty authorization callback URL")
    query = urlsplit(redirect_url).query
    params: Dict[str, str] = {}
    for name, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(name, value)
    return params
