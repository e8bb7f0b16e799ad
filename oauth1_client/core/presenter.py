import asyncio
from typing import Callable, Optional, Protocol

from .errors import UserCancelled
from ..utils.logger import get_logger

logger = get_logger(__name__)

class AuthorizationPresenter(Protocol):
    """
    Shows the authorization URL to the user and reports where the provider
    redirected them.

    Returns the final redirect URL, or ``None`` (or raises ``UserCancelled``)
    when the user backed out.
    """

    async def present(self, authorization_url: str, callback_scheme: str) -> Optional[str]:
        ...

class ConsolePresenter:
    """Prints the authorization URL and reads the redirect URL from stdin."""

    def __init__(self, prompt: str = "Paste the URL you were redirected to: ",
                 output: Callable[[str], None] = print,
                 read_line: Callable[[str], str] = input):
        self.prompt = prompt
        self._output = output
        self._read_line = read_line

    async def present(self, authorization_url: str, callback_scheme: str) -> Optional[str]:
        self._output(f"Open this URL to authorize the application:\n{authorization_url}")
        loop = asyncio.get_running_loop()
        try:
            line = await loop.run_in_executor(None, self._read_line, self.prompt)
        except EOFError:
            raise UserCancelled("no redirect URL entered")

        line = line.strip()
        if not line:
            return None
        if callback_scheme and not line.startswith(f"{callback_scheme}:"):
            logger.warning(f"Redirect URL does not use the callback scheme '{callback_scheme}'")
        return line
