from .interfaces import ApiRequesterInterface, Transport
from .options import DefaultTable, RequestOptions, RequestScope
from .requester import ApiRequester, encode_body

__all__ = [
    "ApiRequester",
    "ApiRequesterInterface",
    "DefaultTable",
    "RequestOptions",
    "RequestScope",
    "Transport",
    "encode_body",
]
