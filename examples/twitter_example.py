"""
Example of the Twitter OAuth 1.0a sign-in flow.

Needs TWITTER_CONSUMER_KEY, TWITTER_CONSUMER_SECRET and TWITTER_CALLBACK_URL
in the environment or a .env file.
"""

import asyncio
from oauth1_client import ConsolePresenter, OAuth1Error, TwitterOAuth
from oauth1_client.config import get_settings

async def main():
    settings = get_settings()

    # Raises ConfigurationMissing when credentials are not configured
    oauth = TwitterOAuth.from_settings(settings)

    try:
        token = await oauth.sign_in(ConsolePresenter(), timeout=settings.AUTHORIZATION_TIMEOUT)
        print("\nAccess token:", token.token)
        print("User:", token.extra.get("screen_name"))

        # Sign a protected API call with the new token
        request = oauth.sign_api_request(
            "GET",
            "https://api.twitter.com/1.1/account/verify_credentials.json?include_email=true",
            token,
        )
        print("\nAuthorization header for verify_credentials:")
        print(request.authorization_header)

    except OAuth1Error as e:
        print(f"Error ({type(e).__name__}): {str(e)}")

if __name__ == "__main__":
    asyncio.run(main())
