"""
Single-request HTTP probe: validate a URL, send one GET through a pluggable
transport and classify the status code.
"""

from .classifier import CATEGORIES, classify
from .dispatcher import RequestDispatcher, validate_url
from .errors import EmptyInput, InvalidURL, ProbeError, TransportError
from .result import Result
from .transport import TransportResponse, create_transport

__all__ = [
    "CATEGORIES",
    "classify",
    "RequestDispatcher",
    "validate_url",
    "EmptyInput",
    "InvalidURL",
    "ProbeError",
    "TransportError",
    "Result",
    "TransportResponse",
    "create_transport",
]
