import asyncio
from typing import Dict, Optional, Protocol

import aiohttp

from .errors import NetworkFailure
from ..models import HttpResponse
from ..utils.logger import get_logger

logger = get_logger(__name__)

class HttpTransport(Protocol):
    """Anything able to send one HTTP request."""

    async def send(self, method: str, url: str, headers: Dict[str, str],
                   body: Optional[str] = None) -> HttpResponse:
        ...

class AiohttpTransport:
    """HTTP transport backed by aiohttp."""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, timeout: float = 30.0):
        """
        Args:
            session: Session to reuse. The caller owns it; when omitted a
                session is opened for each request
            timeout: Total timeout per request in seconds
        """
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def send(self, method: str, url: str, headers: Dict[str, str],
                   body: Optional[str] = None) -> HttpResponse:
        logger.debug(f"{method} {url}")
        try:
            if self._session is not None:
                return await self._send(self._session, method, url, headers, body)
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                return await self._send(session, method, url, headers, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Request to {url} failed: {type(e).__name__}: {str(e)}")
            raise NetworkFailure(f"{method} {url} failed: {type(e).__name__}", cause=e) from e

    async def _send(self, session: aiohttp.ClientSession, method: str, url: str,
                    headers: Dict[str, str], body: Optional[str]) -> HttpResponse:
        async with session.request(method, url, headers=headers, data=body,
                                   timeout=self._timeout) as response:
            text = await response.text()
            logger.debug(f"Response status from {url}: {response.status}")
            return HttpResponse(
                status_code=response.status,
                body=text,
                headers={k: v for k, v in response.headers.items()},
            )
