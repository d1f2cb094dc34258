from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gitea-api-client")
except PackageNotFoundError:
    __version__ = "unknown"

from .api.options import RequestOptions, RequestScope  # noqa: E402
from .api.requester import ApiRequester  # noqa: E402
from .client import Client, GiteaClientError  # noqa: E402
from .logging import DefaultLogger, Logger  # noqa: E402

__all__ = [
    "ApiRequester",
    "Client",
    "DefaultLogger",
    "GiteaClientError",
    "Logger",
    "RequestOptions",
    "RequestScope",
    "__version__",
]
