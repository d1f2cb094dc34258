from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

from .options import RequestOptions, RequestScope


@runtime_checkable
class Transport(Protocol):
    """Protocol for the HTTP client an API requester delegates to."""

    async def request(
        self, method: str, path: str, options: Optional[RequestOptions] = None
    ) -> Any:
        """
        Send a request relative to the API base URL.

        Args:
            method: HTTP method name
            path: Path below the API root, e.g. ``repos/owner/name``
            options: Query parameters, headers, body and debug flag

        Returns:
            The transport's response object

        Raises:
            Whatever the transport raises on network failure or an
            unsuccessful status.
        """
        ...


@runtime_checkable
class ApiRequesterInterface(Protocol):
    """Protocol implemented by every API resource wrapper."""

    def configure(self) -> "ApiRequesterInterface":
        ...

    def get_default_parameters_for_type(
        self, scope: Union[RequestScope, str, None] = RequestScope.ALL
    ) -> Dict[str, str]:
        ...

    def get_default_headers_for_type(
        self, scope: Union[RequestScope, str, None] = RequestScope.ALL
    ) -> Dict[str, str]:
        ...

    async def get(
        self,
        path: str,
        parameters: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, Any]] = None,
        debug: bool = False,
    ) -> Any:
        ...

    async def post(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None,
        debug: bool = False,
    ) -> Any:
        ...

    async def put(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, Any]] = None,
        debug: bool = False,
    ) -> Any:
        ...

    async def delete(
        self, path: str, headers: Optional[Dict[str, Any]] = None, debug: bool = False
    ) -> Any:
        ...
