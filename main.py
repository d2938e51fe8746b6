"""
Entrypoint: load config, init logging, read a URL, dispatch one HTTP request
and print the status code with its category.
"""

import argparse
import asyncio
import sys
from typing import List, Optional, TextIO

import structlog
from dotenv import load_dotenv

from probe.config import Config
from probe.dispatcher import RequestDispatcher
from probe.errors import EmptyInput, InvalidURL, TransportError
from probe.log import setup_logging
from probe.result import Result
from probe.transport import BACKENDS, create_transport

logger = structlog.get_logger(__name__)

EMPTY_INPUT_MESSAGE = "The URL field is required."
INVALID_URL_MESSAGE = "The format is invalid."
NO_RESPONSE_MESSAGE = "ERROR: No response."
RESULTS_HEADER = "HTTP request results"
DATA_AVAILABLE_SUFFIX = ". Data available"

EXIT_OK = 0
EXIT_NO_RESPONSE = 1
EXIT_REJECTED = 2


def render_result(result: Result) -> List[str]:
    """Lines shown for a completed request."""
    message = result.category
    if result.has_body:
        message += DATA_AVAILABLE_SUFFIX
    return [RESULTS_HEADER, f"Code: {result.code}", message]


async def run_probe(url_text: Optional[str], dispatcher: RequestDispatcher, out: TextIO = None) -> int:
    """Dispatch url_text, print the outcome to out and return an exit status."""
    out = out or sys.stdout

    try:
        task = dispatcher.dispatch(url_text)
    except EmptyInput:
        print(EMPTY_INPUT_MESSAGE, file=out)
        return EXIT_REJECTED
    except InvalidURL:
        print(INVALID_URL_MESSAGE, file=out)
        return EXIT_REJECTED

    try:
        result = await task
    except TransportError:
        print(NO_RESPONSE_MESSAGE, file=out)
        return EXIT_NO_RESPONSE

    for line in render_result(result):
        print(line, file=out)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send one GET request to a URL and report its HTTP status category."
    )
    parser.add_argument("url", nargs="?", help="URL to test (read from standard input when omitted)")
    parser.add_argument("--transport", choices=BACKENDS, help="HTTP client backend (default from config)")
    parser.add_argument("--config", help="Path to an alternative config.yaml")
    return parser


def read_url(stream: TextIO) -> str:
    """Read one URL line, without its line terminator."""
    if stream.isatty():
        print("URL: ", end="", flush=True)
    line = stream.readline()
    return line.rstrip("\r\n")


async def _main(url_text: str, backend: str, options: dict) -> int:
    async with create_transport(backend, **options) as transport:
        dispatcher = RequestDispatcher(transport=transport)
        return await run_probe(url_text, dispatcher)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, wire dependencies and run a single probe."""
    args = build_parser().parse_args(argv)

    # Load environment variables from .env file
    load_dotenv()

    config = Config(args.config)
    log_config = config.logging
    setup_logging(log_config.get('level', 'INFO'), log_config.get('format', 'console'))

    backend = args.transport or config.transport.get('backend', 'httpx')
    if backend not in BACKENDS:
        logger.error("unknown_transport", transport=backend, expected=list(BACKENDS))
        return EXIT_REJECTED

    url_text = args.url if args.url is not None else read_url(sys.stdin)
    return asyncio.run(_main(url_text, backend, config.transport_options()))


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
