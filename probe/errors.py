"""
Failure outcomes of a dispatch.
"""


class ProbeError(Exception):
    """Base class for every dispatch failure."""


class EmptyInput(ProbeError):
    """No URL text was supplied."""

    def __init__(self, message: str = "URL text is empty"):
        super().__init__(message)


class InvalidURL(ProbeError):
    """The URL text does not describe a reachable target."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL {url!r}: {reason}")


class TransportError(ProbeError):
    """The transport could not produce an HTTP response."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"No response from {url}: {reason}")
