"""
Transports perform the actual GET request.

Every backend satisfies the same ``Transport`` protocol: ``get(url)`` returns
a ``TransportResponse`` or raises ``TransportError``. Status classification
lives in the dispatcher, never here.
"""

import asyncio
import http.client
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx
import requests
import structlog
import urllib3

from .errors import TransportError

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "HTTPResponseCode/1.0"
BACKENDS = ("httpx", "requests", "urllib")


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of a transport call.

    ``status_code`` is ``None`` when the target answered with something that
    is not an HTTP response (for instance a local file read by urllib).
    """

    status_code: Optional[int]
    body_present: bool = False


class Transport(Protocol):
    """Capability: perform a GET request and report status and body presence."""

    name: str

    async def get(self, url: str) -> TransportResponse:
        ...

    async def aclose(self) -> None:
        ...


class _BaseTransport:
    name = "base"

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self) -> None:
        pass

    def _fail(self, url: str, exc: Exception) -> TransportError:
        logger.warning(
            "transport_error",
            transport=self.name,
            url=url,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return TransportError(url, f"{type(exc).__name__}: {exc}")


class HttpxTransport(_BaseTransport):
    """Async transport backed by ``httpx.AsyncClient``."""

    name = "httpx"

    def __init__(
        self,
        client: httpx.AsyncClient = None,
        follow_redirects: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            follow_redirects=follow_redirects,
            headers={'User-Agent': user_agent},
        )

    async def get(self, url: str) -> TransportResponse:
        try:
            response = await self._client.get(url)
        # idna rejects some hosts urlsplit accepts, raising UnicodeError (a ValueError)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise self._fail(url, e) from e

        logger.debug("transport_response", transport=self.name, url=url, status_code=response.status_code)
        return TransportResponse(
            status_code=response.status_code,
            body_present=len(response.content) > 0,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class RequestsTransport(_BaseTransport):
    """Blocking ``requests.Session`` transport, run in a worker thread."""

    name = "requests"

    def __init__(
        self,
        session: requests.Session = None,
        follow_redirects: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers['User-Agent'] = user_agent
        self._session = session
        self.follow_redirects = follow_redirects

    def _get(self, url: str) -> TransportResponse:
        try:
            response = self._session.get(url, allow_redirects=self.follow_redirects)
            content = response.content
        # urllib3 raises LocationParseError unwrapped for hosts it cannot parse
        except (requests.RequestException, urllib3.exceptions.HTTPError, ValueError) as e:
            raise self._fail(url, e) from e

        return TransportResponse(
            status_code=response.status_code,
            body_present=len(content or b'') > 0,
        )

    async def get(self, url: str) -> TransportResponse:
        return await asyncio.to_thread(self._get, url)

    async def aclose(self) -> None:
        if self._owns_session:
            self._session.close()


class UrllibTransport(_BaseTransport):
    """Standard library transport built on ``urllib.request``.

    urllib raises ``HTTPError`` for 4xx and 5xx answers; those still carry a
    status code and are reported as responses, not failures.
    """

    name = "urllib"

    def __init__(
        self,
        opener: urllib.request.OpenerDirector = None,
        follow_redirects: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        if opener is None:
            handlers = [] if follow_redirects else [_NoRedirectHandler()]
            opener = urllib.request.build_opener(*handlers)
            opener.addheaders = [('User-Agent', user_agent)]
        self._opener = opener

    def _get(self, url: str) -> TransportResponse:
        try:
            with self._opener.open(url) as response:
                body = response.read()
                status_code = response.getcode()
        except urllib.error.HTTPError as e:
            body = e.read()
            return TransportResponse(status_code=e.code, body_present=len(body or b'') > 0)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            raise self._fail(url, e) from e

        return TransportResponse(status_code=status_code, body_present=len(body) > 0)

    async def get(self, url: str) -> TransportResponse:
        return await asyncio.to_thread(self._get, url)


class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Hands 3xx answers back to the caller instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def create_transport(name: str = "httpx", **options) -> Transport:
    """Create a transport backend by name."""
    if name == "httpx":
        return HttpxTransport(**options)
    if name == "requests":
        return RequestsTransport(**options)
    if name == "urllib":
        return UrllibTransport(**options)
    raise ValueError(f"Unknown transport backend: {name!r} (expected one of {', '.join(BACKENDS)})")
