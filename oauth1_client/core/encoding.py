"""
RFC 3986 percent-encoding and form-encoded body parsing.

Generic URL helpers leave ``/`` unescaped and turn spaces into ``+``; both
break OAuth signatures, so every string that ends up in a signature base
string or an ``Authorization`` header goes through ``percent_encode``.
"""

from typing import List, Tuple
from urllib.parse import parse_qsl, quote, unquote

from .errors import MalformedResponse

# Characters never escaped (RFC 3986 section 2.3). ``quote`` already treats
# these as safe; everything else, including '/' and ':', is escaped.
UNRESERVED = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~"
)


def percent_encode(value: str) -> str:
    """Percent-encode ``value`` for use in OAuth 1.0a signatures and headers."""
    return quote(value, safe="")


def percent_decode(value: str) -> str:
    """Reverse ``percent_encode``. A ``+`` stays a literal plus sign."""
    return unquote(value)


def parse_form_encoded(body: str) -> List[Tuple[str, str]]:
    """
    Parse an ``application/x-www-form-urlencoded`` body into name/value pairs.

    Raises:
        MalformedResponse: if the body is empty or not ``key=value&...``
    """
    if body is None or not body.strip():
        raise MalformedResponse("Empty response body", body)
    try:
        return parse_qsl(body.strip(), keep_blank_values=True, strict_parsing=True)
    except ValueError as e:
        raise MalformedResponse(f"Response body is not form-encoded: {e}", body) from e
