"""Tests for the command line front end."""

from __future__ import annotations

import io

import pytest

import main
from probe.dispatcher import RequestDispatcher
from probe.errors import TransportError
from probe.result import Result
from probe.transport import TransportResponse


class StubTransport:
    """Transport stub returning a fixed response or raising a fixed error."""

    name = "stub"

    def __init__(self, response: TransportResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[str] = []

    async def get(self, url: str) -> TransportResponse:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


def test_render_result_with_body() -> None:
    assert main.render_result(Result(code=200, has_body=True)) == [
        "HTTP request results",
        "Code: 200",
        "Success. Data available",
    ]


def test_render_result_without_body() -> None:
    assert main.render_result(Result(code=404)) == ["HTTP request results", "Code: 404", "Not found"]


@pytest.mark.asyncio
async def test_run_probe_success() -> None:
    out = io.StringIO()
    dispatcher = RequestDispatcher(StubTransport(TransportResponse(status_code=301, body_present=False)))

    status = await main.run_probe("https://example.com", dispatcher, out=out)

    assert status == main.EXIT_OK
    assert out.getvalue().splitlines() == ["HTTP request results", "Code: 301", "Redirection"]


@pytest.mark.asyncio
async def test_run_probe_empty_input() -> None:
    out = io.StringIO()
    transport = StubTransport()

    status = await main.run_probe("", RequestDispatcher(transport), out=out)

    assert status == main.EXIT_REJECTED
    assert out.getvalue() == "The URL field is required.\n"
    assert transport.calls == []


@pytest.mark.asyncio
async def test_run_probe_invalid_url() -> None:
    out = io.StringIO()
    transport = StubTransport()

    status = await main.run_probe("not a url", RequestDispatcher(transport), out=out)

    assert status == main.EXIT_REJECTED
    assert out.getvalue() == "The format is invalid.\n"
    assert transport.calls == []


@pytest.mark.asyncio
async def test_run_probe_no_response() -> None:
    out = io.StringIO()
    transport = StubTransport(error=TransportError("https://example.com", "ConnectError: refused"))

    status = await main.run_probe("https://example.com", RequestDispatcher(transport), out=out)

    assert status == main.EXIT_NO_RESPONSE
    assert out.getvalue() == "ERROR: No response.\n"


def test_read_url_strips_line_terminator() -> None:
    assert main.read_url(io.StringIO("https://example.com\r\n")) == "https://example.com"
    assert main.read_url(io.StringIO("")) == ""


def test_main_rejects_empty_argument(capsys) -> None:
    status = main.main(["", "--transport", "urllib"])

    assert status == main.EXIT_REJECTED
    assert "The URL field is required." in capsys.readouterr().out


def test_main_reads_url_from_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("not a url\n"))

    status = main.main(["--transport", "requests"])

    assert status == main.EXIT_REJECTED
    assert "The format is invalid." in capsys.readouterr().out


def test_main_unknown_backend_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PROBE_TRANSPORT", "carrier-pigeon")

    assert main.main(["https://example.com"]) == main.EXIT_REJECTED


def test_parser_rejects_unknown_transport_flag() -> None:
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["https://example.com", "--transport", "carrier-pigeon"])


def test_main_unparseable_host_prints_no_response(capsys) -> None:
    status = main.main(["http://a..b/", "--transport", "requests"])

    assert status == main.EXIT_NO_RESPONSE
    assert "ERROR: No response." in capsys.readouterr().out
