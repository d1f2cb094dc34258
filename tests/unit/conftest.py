from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession

from gitea.api.requester import ApiRequester
from gitea.client import Client
from gitea.logging import Logger


class RepositoriesApi(ApiRequester):
    """Minimal resource wrapper used across the requester tests."""


@pytest.fixture
def base_url():
    return "https://git.example.com"


@pytest.fixture
def token():
    return "0123456789abcdef"


@pytest.fixture
def transport():
    """Stand-in for the HTTP transport; records every request."""
    mock_transport = AsyncMock()
    mock_transport.request = AsyncMock(return_value=MagicMock(status=200))
    return mock_transport


@pytest.fixture
def requester_factory(transport, token):
    def _create_requester(cls=RepositoriesApi, auth_token=None, configure=None):
        return cls(transport, auth_token or token, configure=configure)

    return _create_requester


@pytest.fixture
def requester(requester_factory):
    return requester_factory()


@pytest.fixture
def sent(transport):
    """Return (method, path, options) of the last request the transport saw."""

    def _last_call():
        transport.request.assert_awaited()
        return transport.request.await_args.args

    return _last_call


@pytest.fixture
def mock_response_factory():
    def _create_response(status=200, json_data=None, headers=None, raise_error=None):
        mock_response = MagicMock()
        mock_response.status = status
        mock_response.headers = headers or {"Content-Type": "application/json"}
        mock_response.json = AsyncMock(return_value=json_data)
        if raise_error:
            mock_response.raise_for_status = MagicMock(side_effect=raise_error)
        else:
            mock_response.raise_for_status = MagicMock(return_value=None)
        return mock_response

    return _create_response


@pytest.fixture
def mock_client_session():
    def _create_session(response=None, side_effect=None):
        mock_session = MagicMock(spec=ClientSession)
        mock_session.closed = False
        if side_effect:
            mock_session.request = AsyncMock(side_effect=side_effect)
        else:
            mock_session.request = AsyncMock(return_value=response)
        return mock_session

    return _create_session


@pytest.fixture
def mock_logger():
    return MagicMock(spec=Logger)


@pytest.fixture
def client_factory(base_url, mock_client_session, mock_response_factory):
    """Client wired to a mocked aiohttp session."""

    def _create_client(response=None, side_effect=None, **kwargs):
        if response is None and side_effect is None:
            response = mock_response_factory()
        session = mock_client_session(response=response, side_effect=side_effect)
        return Client(url=base_url, session=session, **kwargs)

    return _create_client
