import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from oauth1_client.config import Settings
from oauth1_client.core.errors import ConfigurationMissing, TokenMismatch
from oauth1_client.core.signature import parse_authorization_header, sign, signature_base_string, signing_key
from oauth1_client.core.transport import AiohttpTransport
from oauth1_client.models import FlowState, OAuth1Endpoints
from oauth1_client.platforms import TWITTER_ENDPOINTS, TwitterOAuth
from conftest import ScriptedPresenter

def test_twitter_defaults():
    oauth = TwitterOAuth("ck", "cs", "myapp://")

    assert oauth.endpoints == TWITTER_ENDPOINTS
    assert oauth.endpoints.authorize_url == "https://api.twitter.com/oauth/authorize"
    assert oauth.callback_scheme == "myapp"
    assert oauth.state is FlowState.IDLE
    assert isinstance(oauth.transport, AiohttpTransport)
    assert oauth.authorization_url("rt") == "https://api.twitter.com/oauth/authorize?oauth_token=rt"

@pytest.mark.parametrize("args", [
    (None, "cs", "myapp://"),
    ("ck", "", "myapp://"),
    ("ck", "cs", None),
])
def test_twitter_missing_credentials(args):
    with pytest.raises(ConfigurationMissing):
        TwitterOAuth(*args)

def test_twitter_from_settings():
    settings = Settings(
        _env_file=None,
        TWITTER_CONSUMER_KEY="ck",
        TWITTER_CONSUMER_SECRET="cs",
        TWITTER_CALLBACK_URL="myapp://",
        TWITTER_AUTHORIZE_URL="https://api.twitter.com/oauth/authenticate",
    )
    oauth = TwitterOAuth.from_settings(settings)

    assert oauth.credentials.consumer_key == "ck"
    assert oauth.endpoints.authorize_url == "https://api.twitter.com/oauth/authenticate"

def test_twitter_from_settings_requires_credentials():
    settings = Settings(_env_file=None, TWITTER_CONSUMER_KEY="ck", TWITTER_CONSUMER_SECRET="",
                        TWITTER_CALLBACK_URL=None)

    with pytest.raises(ConfigurationMissing) as excinfo:
        TwitterOAuth.from_settings(settings)

    assert excinfo.value.missing == ["TWITTER_CONSUMER_SECRET", "TWITTER_CALLBACK_URL"]

def _provider_app(seen):
    """Minimal OAuth 1.0a provider that checks every signature it receives."""
    token_secrets = {'rt': "rts"}

    def verify(request):
        params = dict(parse_authorization_header(request.headers['Authorization']))
        signature = params.pop('oauth_signature')
        token_secret = token_secrets.get(params.get('oauth_token'))
        expected = sign(signature_base_string(request.method, str(request.url), params.items()),
                        signing_key("cs", token_secret))
        return params, signature == expected

    async def request_token(request):
        params, valid = verify(request)
        seen.append(('request_token', params, valid))
        if not valid:
            return web.Response(status=401, text="Could not authenticate you.")
        return web.Response(text="oauth_token=rt&oauth_token_secret=rts&oauth_callback_confirmed=true")

    async def access_token(request):
        params, valid = verify(request)
        seen.append(('access_token', params, valid))
        if not valid:
            return web.Response(status=401, text="Invalid signature")
        return web.Response(text="oauth_token=6253282-at&oauth_token_secret=ats&user_id=6253282&screen_name=jack")

    app = web.Application()
    app.router.add_post('/oauth/request_token', request_token)
    app.router.add_post('/oauth/access_token', access_token)
    return app

def _local_endpoints(server):
    return OAuth1Endpoints(
        request_token_url=str(server.make_url('/oauth/request_token')),
        authorize_url=str(server.make_url('/oauth/authorize')),
        access_token_url=str(server.make_url('/oauth/access_token')),
    )

@pytest.mark.asyncio
async def test_twitter_sign_in_against_local_provider():
    seen = []
    async with TestServer(_provider_app(seen)) as server:
        oauth = TwitterOAuth("ck", "cs", "myapp://", endpoints=_local_endpoints(server),
                             transport=AiohttpTransport(timeout=5))
        presenter = ScriptedPresenter("myapp://?oauth_token=rt&oauth_verifier=verifier")

        token = await oauth.sign_in(presenter, force_login=True)

    assert token.token == "6253282-at"
    assert token.token_secret == "ats"
    assert token.extra == {'user_id': "6253282", 'screen_name': "jack"}
    assert presenter.calls[0][0].endswith("/oauth/authorize?oauth_token=rt&force_login=true")
    assert presenter.calls[0][1] == "myapp"

    assert [(step, valid) for step, _, valid in seen] == [('request_token', True), ('access_token', True)]
    assert seen[0][1]['oauth_callback'] == "myapp://"
    assert seen[1][1]['oauth_verifier'] == "verifier"

@pytest.mark.asyncio
async def test_twitter_mismatched_callback_never_reaches_access_token():
    seen = []
    async with TestServer(_provider_app(seen)) as server:
        oauth = TwitterOAuth("ck", "cs", "myapp://", endpoints=_local_endpoints(server))
        presenter = ScriptedPresenter("myapp://?oauth_token=someone-else&oauth_verifier=verifier")

        with pytest.raises(TokenMismatch):
            await oauth.sign_in(presenter)

    assert [step for step, _, _ in seen] == ['request_token']
