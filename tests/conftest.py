import asyncio
import itertools
import pytest
from oauth1_client.core.flow import OAuth1Flow
from oauth1_client.models import Credentials, HttpResponse, OAuth1Endpoints

REQUEST_TOKEN_URL = "https://api.example.com/oauth/request_token"
AUTHORIZE_URL = "https://api.example.com/oauth/authorize"
ACCESS_TOKEN_URL = "https://api.example.com/oauth/access_token"

class FakeTransport:
    """Records requests and replays canned responses (or raises canned errors)."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.requests = []
        self.gate = None

    async def send(self, method, url, headers, body=None):
        self.requests.append({'method': method, 'url': url, 'headers': dict(headers), 'body': body})
        if self.gate is not None:
            await self.gate.wait()
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

class ScriptedPresenter:
    """Returns a fixed redirect URL, or raises / waits as instructed."""

    def __init__(self, redirect_url=None, error=None, delay=None):
        self.redirect_url = redirect_url
        self.error = error
        self.delay = delay
        self.calls = []

    async def present(self, authorization_url, callback_scheme):
        self.calls.append((authorization_url, callback_scheme))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.redirect_url

def ok(body):
    return HttpResponse(status_code=200, body=body)

@pytest.fixture
def credentials():
    return Credentials(consumer_key="ck", consumer_secret="cs", callback_uri="app://cb")

@pytest.fixture
def endpoints():
    return OAuth1Endpoints(
        request_token_url=REQUEST_TOKEN_URL,
        authorize_url=AUTHORIZE_URL,
        access_token_url=ACCESS_TOKEN_URL,
    )

@pytest.fixture
def transport():
    return FakeTransport([
        ok("oauth_token=rt&oauth_token_secret=rts&oauth_callback_confirmed=true"),
        ok("oauth_token=at&oauth_token_secret=ats&user_id=6253282&screen_name=jack"),
    ])

@pytest.fixture
def make_flow(credentials, endpoints):
    """Build a flow with predictable nonces and a fixed clock."""
    def _make(transport, **kwargs):
        counter = itertools.count(1)
        kwargs.setdefault('nonce_factory', lambda: f"nonce{next(counter)}")
        kwargs.setdefault('clock', lambda: "1000000000")
        return OAuth1Flow(credentials, endpoints, transport=transport, **kwargs)
    return _make

@pytest.fixture
def flow(make_flow, transport):
    return make_flow(transport)
