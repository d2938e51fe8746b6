"""
Validate a URL, send one GET request through a transport and classify the answer.

Per call: validate → request → build Result. Validation failures are raised
synchronously from dispatch(); everything after that is delivered through the
returned task and the optional completion callback.
"""

import asyncio
import functools
from typing import Callable, Optional
from urllib.parse import urlsplit

import structlog

from .errors import EmptyInput, InvalidURL, ProbeError, TransportError
from .result import Result
from .transport import Transport

logger = structlog.get_logger(__name__)

RECOGNIZED_SCHEMES = ('http', 'https')
FILE_SCHEME = 'file'

Callback = Callable[[Optional[Result], Optional[BaseException]], None]


def validate_url(url_text: Optional[str]) -> str:
    """Return url_text if it can be requested, else raise EmptyInput or InvalidURL."""
    if url_text is None or url_text == "":
        raise EmptyInput()

    if not isinstance(url_text, str):
        raise InvalidURL(repr(url_text), "not a string")

    if any(ch.isspace() or not ch.isprintable() for ch in url_text):
        raise InvalidURL(url_text, "contains whitespace or control characters")

    try:
        parsed = urlsplit(url_text)
        # port is parsed lazily and raises on garbage like "host:abc"
        parsed.port
    except ValueError as e:
        raise InvalidURL(url_text, str(e)) from e

    scheme = parsed.scheme.lower()
    if scheme == FILE_SCHEME:
        return url_text

    if scheme not in RECOGNIZED_SCHEMES:
        raise InvalidURL(url_text, f"unrecognized scheme: {parsed.scheme or '(none)'}")

    if not parsed.hostname:
        raise InvalidURL(url_text, "missing host")

    return url_text


class RequestDispatcher:
    """Runs one validate-request-classify cycle per dispatch() call.

    The dispatcher keeps no per-call state, so a single instance can be shared
    by concurrent callers.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    @property
    def transport_name(self) -> str:
        return getattr(self.transport, "name", type(self.transport).__name__)

    def dispatch(self, url_text: Optional[str], callback: Optional[Callback] = None) -> "asyncio.Task[Result]":
        """Validate url_text and schedule the request on the running loop.

        Raises EmptyInput or InvalidURL before any I/O. Otherwise returns a
        task resolving to a Result or failing with TransportError. When given,
        callback is called exactly once as callback(result, error).
        """
        try:
            url = validate_url(url_text)
        except ProbeError as e:
            logger.warning("dispatch_rejected", url=url_text, error_type=type(e).__name__, error=str(e))
            raise

        task = asyncio.get_running_loop().create_task(self._request(url))
        if callback is not None:
            task.add_done_callback(functools.partial(_deliver, callback, url))
        return task

    async def probe(self, url_text: Optional[str]) -> Result:
        """Dispatch url_text and wait for its Result."""
        return await self.dispatch(url_text)

    async def _request(self, url: str) -> Result:
        logger.info("dispatch_started", url=url, transport=self.transport_name)
        try:
            response = await self.transport.get(url)
        except TransportError as e:
            logger.error("dispatch_failed", url=url, transport=self.transport_name, reason=e.reason)
            raise

        if response.status_code is None:
            logger.error("dispatch_failed", url=url, transport=self.transport_name, reason="no HTTP status")
            raise TransportError(url, "response carries no HTTP status")

        result = Result(code=response.status_code, has_body=response.body_present)
        logger.info("dispatch_completed", url=url, transport=self.transport_name, **result.to_dict())
        return result


def _deliver(callback: Callback, url: str, task: asyncio.Task):
    if task.cancelled():
        callback(None, TransportError(url, "request cancelled"))
        return

    error = task.exception()
    if error is not None:
        callback(None, error)
    else:
        callback(task.result(), None)
