"""
OAuth 1.0a HMAC-SHA1 request signing (RFC 5849 section 3.4).

Nothing in this module performs I/O. The signature base string and the
``Authorization`` header are built by separate functions: the header quotes
its values and uses a different separator, so one must not stand in for
the other.
"""

import base64
import hashlib
import hmac
import secrets
import time
from typing import Iterable, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from .encoding import percent_decode, percent_encode
from ..models import SignatureParameters, SignedRequest

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def generate_nonce() -> str:
    """Return a fresh single-use nonce."""
    return secrets.token_hex(16)


def generate_timestamp() -> str:
    """Return the current Unix time in seconds."""
    return str(int(time.time()))


def oauth_parameters(consumer_key: str, nonce: Optional[str] = None,
                     timestamp: Optional[str] = None, **extra: str) -> SignatureParameters:
    """
    Build the protocol parameter set for one request.

    Args:
        consumer_key: Consumer key issued by the provider
        nonce: Nonce to use, a fresh one when omitted
        timestamp: Timestamp to use, the current time when omitted
        **extra: Request-specific fields such as ``oauth_callback``,
            ``oauth_token`` or ``oauth_verifier``

    Returns:
        List of name/value pairs
    """
    params = [
        ("oauth_consumer_key", consumer_key),
        ("oauth_nonce", nonce or generate_nonce()),
        ("oauth_signature_method", SIGNATURE_METHOD),
        ("oauth_timestamp", timestamp or generate_timestamp()),
        ("oauth_version", OAUTH_VERSION),
    ]
    params.extend((name, value) for name, value in extra.items())
    return params


def normalize_base_url(url: str) -> str:
    """
    Base string URI of ``url``: lower-case scheme and host, default port
    dropped, query and fragment removed.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    return urlunsplit((scheme, host, parts.path or "/", "", ""))


def query_parameters(url: str) -> SignatureParameters:
    """Decoded query parameters carried by ``url``."""
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


def normalize_parameters(params: Iterable[Tuple[str, str]]) -> str:
    """
    Encode, sort and join the parameters of a signature base string.

    Pairs sort by encoded name, then encoded value, so ``a=1`` precedes
    ``a-b=2`` even though ``-`` sorts below ``=``.
    """
    encoded = sorted(
        (percent_encode(name), percent_encode(value))
        for name, value in params
        if name != "oauth_signature"
    )
    return "&".join(f"{name}={value}" for name, value in encoded)


def signature_base_string(method: str, base_url: str, params: Iterable[Tuple[str, str]]) -> str:
    """
    Build the signature base string.

    Query parameters present on ``base_url`` are folded into ``params``
    before sorting, and the URL itself is reduced to its base string URI.
    """
    all_params = list(params) + query_parameters(base_url)
    return "&".join([
        method.upper(),
        percent_encode(normalize_base_url(base_url)),
        percent_encode(normalize_parameters(all_params)),
    ])


def signing_key(consumer_secret: str, token_secret: Optional[str] = None) -> str:
    """Derive the HMAC key from the consumer secret and optional token secret."""
    key = percent_encode(consumer_secret) + "&"
    if token_secret is not None:
        key += percent_encode(token_secret)
    return key


def sign(base_string: str, key: str) -> str:
    """HMAC-SHA1 of ``base_string`` under ``key``, base64-encoded."""
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(params: Iterable[Tuple[str, str]]) -> str:
    """Format protocol parameters as an ``OAuth`` Authorization header value."""
    components = sorted(
        f'{percent_encode(name)}="{percent_encode(value)}"'
        for name, value in params
    )
    return "OAuth " + ", ".join(components)


def parse_authorization_header(header: str) -> List[Tuple[str, str]]:
    """
    Parse an ``OAuth`` Authorization header value back into name/value pairs.

    Raises:
        ValueError: if ``header`` is not a well-formed OAuth header
    """
    scheme, _, rest = header.strip().partition(" ")
    if scheme.lower() != "oauth":
        raise ValueError(f"Not an OAuth Authorization header: {header[:20]}")

    params = []
    for item in rest.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, quoted = item.partition("=")
        if not sep or len(quoted) < 2 or not (quoted.startswith('"') and quoted.endswith('"')):
            raise ValueError(f"Malformed OAuth header parameter: {item}")
        params.append((percent_decode(name), percent_decode(quoted[1:-1])))
    return params


def sign_request(method: str, url: str, params: Iterable[Tuple[str, str]],
                 consumer_secret: str, token_secret: Optional[str] = None,
                 body_params: Optional[Iterable[Tuple[str, str]]] = None) -> SignedRequest:
    """
    Sign a request and build its Authorization header and form body.

    Args:
        method: HTTP method
        url: Request URL, query string allowed
        params: OAuth protocol parameters (see ``oauth_parameters``)
        consumer_secret: Consumer secret
        token_secret: Token secret, ``None`` for the request-token leg
        body_params: Parameters of a form-encoded body; they are signed too

    Returns:
        SignedRequest
    """
    params = [(name, value) for name, value in params if name != "oauth_signature"]
    body_params = list(body_params or [])

    base_string = signature_base_string(method, url, params + body_params)
    signature = sign(base_string, signing_key(consumer_secret, token_secret))

    body = "&".join(f"{percent_encode(name)}={percent_encode(value)}" for name, value in body_params)
    return SignedRequest(
        method=method.upper(),
        url=url,
        authorization_header=authorization_header(params + [("oauth_signature", signature)]),
        body=body,
    )
