from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DefaultTable = Dict[str, str]


class RequestScope(str, Enum):
    """Which default table applies to a request."""

    ALL = "all"
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"

    @classmethod
    def parse(cls, scope: Union["RequestScope", str, None]) -> Optional["RequestScope"]:
        """Resolve a scope selector.

        An empty selector means ``ALL``. Unknown names resolve to ``None``
        instead of raising so that lookups can fall back to an empty table.
        """
        if isinstance(scope, cls):
            return scope
        if not scope:
            return cls.ALL
        try:
            return cls(str(scope).lower())
        except ValueError:
            return None

    @property
    def method(self) -> str:
        return self.value.upper()


class RequestOptions(BaseModel):
    """Options for a single request, handed to the transport."""

    query: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, Any] = Field(default_factory=dict)
    body: Optional[str] = None
    debug: bool = False

    model_config = ConfigDict(frozen=True)
