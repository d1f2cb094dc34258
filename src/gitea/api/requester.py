"""Base class shared by every Gitea API resource wrapper."""

import json
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel

from ..logging import DefaultLogger, Logger
from .interfaces import Transport
from .options import DefaultTable, RequestOptions, RequestScope

EMPTY_BODY = "{}"

ConfigureHook = Callable[["ApiRequester"], None]


def encode_body(body: Any) -> str:
    """Turn a POST/PUT body into the text payload sent on the wire.

    Strings are sent verbatim, models and other structured values are
    serialized to JSON and a missing or empty body becomes ``{}``.
    """
    if not body:
        return EMPTY_BODY
    if isinstance(body, str):
        return body
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8")
    if isinstance(body, BaseModel):
        return body.model_dump_json()
    return json.dumps(body)


def _merge(defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    merged = dict(defaults)
    if overrides:
        merged.update(overrides)
    return merged


class ApiRequester:
    """Base for API resource wrappers.

    Holds the default headers and query parameters for each request
    scope, injects the auth token into them and forwards GET, POST, PUT
    and DELETE calls to the shared transport.

    Subclasses customise their defaults by overriding ``DEFAULT_HEADERS``
    or ``DEFAULT_PARAMETERS``, by overriding :meth:`configure`, or by passing a
    ``configure`` hook. Both may call :meth:`extend_default_headers` /
    :meth:`extend_default_parameters`.
    The tables are frozen once the constructor returns.
    """

    DEFAULT_PARAMETERS: Dict[RequestScope, DefaultTable] = {
        RequestScope.ALL: {},
        RequestScope.GET: {},
    }

    DEFAULT_HEADERS: Dict[RequestScope, DefaultTable] = {
        RequestScope.ALL: {"Accept": "application/json"},
        RequestScope.GET: {},
        RequestScope.POST: {"Content-Type": "application/json"},
        RequestScope.PUT: {"Content-Type": "application/json"},
        RequestScope.DELETE: {},
    }

    def __init__(
        self,
        client: Transport,
        auth_token: str,
        configure: Optional[ConfigureHook] = None,
        logger: Optional[Logger] = None,
    ):
        self._client = client
        self._auth_token = auth_token
        self._sealed = False

        if logger is None:
            logger = getattr(client, "logger", None)
        self.logger = logger if isinstance(logger, Logger) else DefaultLogger(name="gitea-api")

        # Per-instance copies, class tables stay untouched
        self._parameters = {
            scope: dict(table) for scope, table in self.DEFAULT_PARAMETERS.items()
        }
        self._headers = {scope: dict(table) for scope, table in self.DEFAULT_HEADERS.items()}

        self._parameters.setdefault(RequestScope.GET, {})["access_token"] = auth_token
        for scope in (RequestScope.POST, RequestScope.PUT, RequestScope.DELETE):
            self._headers.setdefault(scope, {})["Authorization"] = f"token {auth_token}"

        if configure is not None:
            configure(self)
        self.configure()
        self._sealed = True

    @property
    def client(self) -> Transport:
        return self._client

    @property
    def auth_token(self) -> str:
        return self._auth_token

    def configure(self) -> "ApiRequester":
        """One-time setup step, does nothing by default.

        Called by the constructor after the auth token and any
        ``configure`` hook are in place. Subclasses override it to add
        resource-specific defaults; once construction is over, further
        attempts to extend the defaults raise ``RuntimeError``.
        """
        return self

    def extend_default_headers(
        self, scope: Union[RequestScope, str], headers: Mapping[str, str]
    ) -> None:
        self._extend(self._headers, scope, headers)

    def extend_default_parameters(
        self, scope: Union[RequestScope, str], parameters: Mapping[str, str]
    ) -> None:
        self._extend(self._parameters, scope, parameters)

    def _extend(
        self,
        tables: Dict[RequestScope, DefaultTable],
        scope: Union[RequestScope, str],
        values: Mapping[str, str],
    ) -> None:
        if self._sealed:
            raise RuntimeError("Default tables can only be extended while configuring")
        resolved = RequestScope.parse(scope)
        if resolved is None:
            raise ValueError(f"Unknown request scope: {scope!r}")
        tables.setdefault(resolved, {}).update(values)

    def get_default_parameters_for_type(
        self, scope: Union[RequestScope, str, None] = RequestScope.ALL
    ) -> Dict[str, str]:
        """Default query parameters for a request scope.

        ``"all"`` or an empty selector returns the parameters shared by
        every request. Any other scope returns the shared parameters
        overlaid with the scope's own. Scopes without a parameter table,
        and unknown scopes, give an empty dict.
        """
        return self._resolve(self._parameters, scope)

    def get_default_headers_for_type(
        self, scope: Union[RequestScope, str, None] = RequestScope.ALL
    ) -> Dict[str, str]:
        """Default headers for a request scope, resolved like the parameters."""
        return self._resolve(self._headers, scope)

    @staticmethod
    def _resolve(
        tables: Dict[RequestScope, DefaultTable], scope: Union[RequestScope, str, None]
    ) -> Dict[str, str]:
        resolved = RequestScope.parse(scope)
        if resolved is None or resolved not in tables:
            return {}
        if resolved is RequestScope.ALL:
            return dict(tables[RequestScope.ALL])
        return _merge(tables.get(RequestScope.ALL, {}), tables[resolved])

    async def get(
        self,
        path: str,
        parameters: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, Any]] = None,
        debug: bool = False,
    ) -> Any:
        """Send a GET request.

        Args:
            path: Path below the API root
            parameters: Query parameters, override the defaults
            headers: Headers, override the defaults
            debug: Ask the transport for verbose diagnostics

        Returns:
            The transport's response, unmodified
        """
        options = RequestOptions(
            query=_merge(self.get_default_parameters_for_type(RequestScope.GET), parameters),
            headers=_merge(self.get_default_headers_for_type(RequestScope.GET), headers),
            debug=debug,
        )
        return await self._send(RequestScope.GET, path, options)

    async def post(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None,
        debug: bool = False,
    ) -> Any:
        """Send a POST request with a JSON body (``{}`` when empty)."""
        return await self._send_with_body(RequestScope.POST, path, body, headers, debug)

    async def put(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None,
        debug: bool = False,
    ) -> Any:
        """Send a PUT request with a JSON body (``{}`` when empty)."""
        return await self._send_with_body(RequestScope.PUT, path, body, headers, debug)

    async def delete(
        self, path: str, headers: Optional[Dict[str, Any]] = None, debug: bool = False
    ) -> Any:
        """Send a DELETE request. No body is sent."""
        options = RequestOptions(
            headers=_merge(self.get_default_headers_for_type(RequestScope.DELETE), headers),
            debug=debug,
        )
        return await self._send(RequestScope.DELETE, path, options)

    async def _send_with_body(
        self,
        scope: RequestScope,
        path: str,
        body: Any,
        headers: Optional[Dict[str, Any]],
        debug: bool,
    ) -> Any:
        options = RequestOptions(
            headers=_merge(self.get_default_headers_for_type(scope), headers),
            body=encode_body(body),
            debug=debug,
        )
        return await self._send(scope, path, options)

    async def _send(self, scope: RequestScope, path: str, options: RequestOptions) -> Any:
        self.logger.debug(f"{scope.method} {path}", query=options.query, headers=options.headers)
        return await self._client.request(scope.method, path, options)
