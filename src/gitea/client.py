from contextlib import AsyncExitStack
from typing import Any, AsyncContextManager, ClassVar, Dict, Optional, Set

from aiohttp import ClientResponse, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, field_validator

from . import __version__
from .api.options import RequestOptions
from .logging import DefaultLogger, Logger


class GiteaClientError(Exception):
    """Raised when the client is used incorrectly."""

    pass


def encode_query(query: Dict[str, Any]) -> Dict[str, str]:
    """Make query values acceptable to aiohttp.

    Booleans become ``true``/``false`` as the Gitea API expects and
    ``None`` values are dropped.
    """
    encoded = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[key] = str(value)
    return encoded


def encode_headers(headers: Dict[str, Any]) -> Dict[str, str]:
    """Header values must be strings on the wire, ``None`` drops the header."""
    return {key: str(value) for key, value in headers.items() if value is not None}


class Client(BaseModel, AsyncContextManager["Client"]):
    """Async HTTP transport for a Gitea instance.

    API requesters hand it fully assembled :class:`RequestOptions`; the
    client adds its own headers, resolves the path against the API root
    and raises for unsuccessful responses.
    """

    DEFAULT_TIMEOUT: ClassVar[int] = 60
    DEFAULT_API_PATH: ClassVar[str] = "/api/v1"

    url: str
    api_path: str = DEFAULT_API_PATH
    timeout: Optional[float] = DEFAULT_TIMEOUT
    session: Optional[ClientSession] = None
    headers: Dict[str, str] = None
    raise_for_status: bool = True
    logger: Optional[Logger] = None
    _exit_stack: Optional[AsyncExitStack] = None
    _owns_session: bool = False

    VALID_METHODS: ClassVar[Set[str]] = {
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "PATCH",
        "HEAD",
    }
    DEFAULT_USER_AGENT: ClassVar[str] = f"gitea-api-client/{__version__}"

    DEFAULT_HEADERS: ClassVar[Dict[str, str]] = {
        "Accept": "application/json",
        "User-Agent": DEFAULT_USER_AGENT,
    }

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("timeout")
    @classmethod
    def _validate_timeout(cls, value):
        if value is not None and value <= 0:
            raise ValueError("Timeout must be a positive number")
        return value

    def __init__(self, url: Optional[str] = None, **data):
        if url is not None:
            data["url"] = url
        super().__init__(**data)

        default_headers = self.DEFAULT_HEADERS.copy()
        if self.headers:
            default_headers.update(self.headers)
        self.headers = default_headers

        if self.logger is None:
            self.logger = DefaultLogger(name="gitea-api-client")

    @property
    def timeout_obj(self) -> ClientTimeout:
        return ClientTimeout(total=self.timeout)

    @property
    def base_url(self) -> str:
        """Root of the REST API, e.g. ``https://git.example.com/api/v1``."""
        api_path = self.api_path.strip("/")
        root = self.url.rstrip("/")
        return f"{root}/{api_path}" if api_path else root

    def build_url(self, path: str = "") -> str:
        if path.startswith(("http://", "https://")):
            return path
        path = path.lstrip("/")
        return f"{self.base_url}/{path}" if path else self.base_url

    async def __aenter__(self) -> "Client":
        self._exit_stack = AsyncExitStack()
        if self.session is None:
            self.session = await self._exit_stack.enter_async_context(ClientSession())
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if self._exit_stack:
                await self._exit_stack.aclose()
        finally:
            self._exit_stack = None
            # An injected session belongs to the caller
            if self._owns_session:
                self.session = None
                self._owns_session = False

    async def request(
        self,
        method: str,
        path: str = "",
        options: Optional[RequestOptions] = None,
    ) -> ClientResponse:
        """Send a request to the Gitea API.

        Args:
            method: HTTP method
            path: Path below the API root, or an absolute URL
            options: Query parameters, headers, body and debug flag

        Returns:
            The aiohttp response

        Raises:
            GiteaClientError: Invalid method or no open session
            aiohttp.ClientResponseError: Status >= 400 while ``raise_for_status`` is set
        """
        options = options or RequestOptions()
        method = method.upper()
        if method not in self.VALID_METHODS:
            raise GiteaClientError(f"Invalid HTTP method: {method}")
        if self.session is None:
            raise GiteaClientError("Session not initialized. Use async with context.")

        url = self.build_url(path)
        headers = self.headers.copy()
        headers.update(encode_headers(options.headers))
        params = encode_query(options.query)

        if options.debug:
            self.logger.info(
                f"Sending {method} {url}", params=params, headers=headers, body=options.body
            )
        else:
            self.logger.debug(f"Making {method} request to {url}")

        response = await self.session.request(
            method=method,
            url=url,
            params=params,
            headers=headers,
            data=options.body,
            timeout=self.timeout_obj,
        )

        if options.debug:
            self.logger.info(
                f"Received {response.status} for {method} {url}", headers=dict(response.headers)
            )
        else:
            self.logger.debug(f"Received response: status={response.status}")

        if self.raise_for_status and response.status >= 400:
            self.logger.warning(f"{method} {url} failed with status {response.status}")
            response.raise_for_status()

        return response

    async def get(self, path: str = "", **kwargs) -> ClientResponse:
        """Make a GET request."""
        return await self.request("GET", path, RequestOptions(**kwargs))

    async def post(self, path: str = "", **kwargs) -> ClientResponse:
        """Make a POST request."""
        return await self.request("POST", path, RequestOptions(**kwargs))

    async def put(self, path: str = "", **kwargs) -> ClientResponse:
        """Make a PUT request."""
        return await self.request("PUT", path, RequestOptions(**kwargs))

    async def delete(self, path: str = "", **kwargs) -> ClientResponse:
        """Make a DELETE request."""
        return await self.request("DELETE", path, RequestOptions(**kwargs))

    def update_headers(self, headers: Dict[str, str]) -> None:
        """Add or replace headers sent with every request."""
        self.headers.update(headers)
        self.logger.debug("Updated headers", headers=headers)

    def update_timeout(self, timeout: float) -> None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError("Timeout must be a positive number")
        self.timeout = timeout
        self.logger.debug(f"Updated timeout to {timeout}s")
