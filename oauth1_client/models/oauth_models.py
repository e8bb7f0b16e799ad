from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Tuple
from enum import Enum

# Ordered name/value pairs; repeats are allowed
SignatureParameters = List[Tuple[str, str]]

class Credentials(BaseModel):
    """Consumer credentials issued by the provider."""
    model_config = ConfigDict(frozen=True)

    consumer_key: str
    consumer_secret: str = Field(repr=False)
    callback_uri: str

class OAuth1Endpoints(BaseModel):
    """Provider endpoints for the three legs of the flow."""
    model_config = ConfigDict(frozen=True)

    request_token_url: str
    authorize_url: str
    access_token_url: str

class TemporaryCredentials(BaseModel):
    """Request token pair obtained in the first leg."""
    model_config = ConfigDict(frozen=True)

    request_token: str
    request_token_secret: str = Field(repr=False)
    callback_confirmed: bool = False

class AccessToken(BaseModel):
    """Token obtained in the final leg."""
    model_config = ConfigDict(frozen=True)

    token: str
    token_secret: Optional[str] = Field(default=None, repr=False)
    extra: Dict[str, str] = Field(default_factory=dict)

class SignedRequest(BaseModel):
    """A request ready to be handed to a transport."""
    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    authorization_header: str
    body: str = ""

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.authorization_header,
            "Content-Type": "application/x-www-form-urlencoded",
        }

class HttpResponse(BaseModel):
    """What a transport returns."""
    status_code: int
    body: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

class FlowState(str, Enum):
    IDLE = "idle"
    REQUESTING_TEMPORARY_CREDENTIALS = "requesting_temporary_credentials"
    AWAITING_USER_AUTHORIZATION = "awaiting_user_authorization"
    EXCHANGING_ACCESS_TOKEN = "exchanging_access_token"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def in_flight(self) -> bool:
        return self in (
            FlowState.REQUESTING_TEMPORARY_CREDENTIALS,
            FlowState.AWAITING_USER_AUTHORIZATION,
            FlowState.EXCHANGING_ACCESS_TOKEN,
        )
