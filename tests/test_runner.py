"""
Tests for RequestRunner rendering and round-trip behaviour.
"""
import asyncio
import json
import re

import httpx
import pytest

from todoctl.adapters.http_client import HttpxAsyncClientAdapter
from todoctl.exceptions import DecodeError, FormatError, TransportError
from todoctl.models import RequestSpec, ResponseOutcome
from todoctl.runner import RequestRunner, decode_body, decode_header_value

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def make_runner(handler, **kwargs):
    return RequestRunner(
        client_factory=lambda: HttpxAsyncClientAdapter(transport=httpx.MockTransport(handler)),
        **kwargs
    )


class TestRender:
    """Tests for output formatting."""

    def test_json_pretty_printed(self, capsys):
        RequestRunner(color=False).render(
            ResponseOutcome(200, b"application/json", b'{"a":1}')
        )
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"a": 1}
        assert '"a": 1' in captured.out
        assert captured.err == "Status: 200\nContent-Type: application/json\n"

    def test_json_colorized_on_terminal(self, capsys, monkeypatch):
        monkeypatch.setenv("TERM", "xterm-256color")
        monkeypatch.delenv("NO_COLOR", raising=False)

        RequestRunner(color=True, force_terminal=True).render(
            ResponseOutcome(200, b"application/json", b'{"a":1,"ok":true}')
        )
        out = capsys.readouterr().out
        assert "\x1b[" in out
        assert json.loads(ANSI_ESCAPE.sub("", out)) == {"a": 1, "ok": True}

    def test_json_not_colorized_when_color_disabled(self, capsys, monkeypatch):
        monkeypatch.setenv("TERM", "xterm-256color")

        RequestRunner(color=False, force_terminal=True).render(
            ResponseOutcome(200, b"application/json", b'{"a":1}')
        )
        out = capsys.readouterr().out
        assert "\x1b[" not in out
        assert json.loads(out) == {"a": 1}

    def test_plain_text_keeps_escape_codes(self, capsys):
        body = "\x1b[31mred\x1b[0m"
        RequestRunner(color=False).render(ResponseOutcome(200, b"text/plain", body.encode("utf-8")))
        assert capsys.readouterr().out == body + "\n"

    def test_plain_text_verbatim(self, capsys):
        RequestRunner(color=False).render(ResponseOutcome(200, b"text/plain", b"hello"))
        captured = capsys.readouterr()
        assert captured.out == "hello\n"

    def test_missing_content_type_prints_raw(self, capsys):
        RequestRunner(color=False).render(ResponseOutcome(500, None, b'{"a": [1, 2]}'))
        captured = capsys.readouterr()
        assert captured.out == '{"a": [1, 2]}\n'
        assert captured.err == "Status: 500\n"

    def test_json_prefix_match(self, capsys):
        RequestRunner(color=False).render(
            ResponseOutcome(200, b"application/json; charset=utf-8", b"[1,2]")
        )
        assert json.loads(capsys.readouterr().out) == [1, 2]

    def test_json_like_content_type_without_prefix_is_raw(self, capsys):
        RequestRunner(color=False).render(
            ResponseOutcome(200, b"application/problem+json", b'{"a":1}')
        )
        assert capsys.readouterr().out == '{"a":1}\n'

    def test_invalid_json_raises_format_error(self, capsys):
        with pytest.raises(FormatError) as exc_info:
            RequestRunner(color=False).render(
                ResponseOutcome(200, b"application/json", b"{broken")
            )
        assert exc_info.value.content_type == "application/json"
        assert capsys.readouterr().out == ""

    def test_empty_json_body_raises_format_error(self):
        with pytest.raises(FormatError):
            RequestRunner(color=False).render(ResponseOutcome(200, b"application/json", b""))

    def test_invalid_utf8_prints_nothing(self, capsys):
        with pytest.raises(DecodeError):
            RequestRunner(color=False).render(ResponseOutcome(200, b"text/plain", b"\xc3\x28"))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_non_ascii_content_type_fails(self, capsys):
        with pytest.raises(DecodeError):
            RequestRunner(color=False).render(ResponseOutcome(200, b"text/pl\xe4in", b"hello"))
        assert capsys.readouterr().out == ""


class TestDecoding:
    def test_decode_body_utf8(self):
        assert decode_body("naïve ✓".encode("utf-8")) == "naïve ✓"

    def test_decode_body_rejects_latin1(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_body("naïve".encode("latin-1"))
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)

    def test_decode_header_value_allows_tab(self):
        assert decode_header_value(b"text/plain;\tcharset=utf-8") == "text/plain;\tcharset=utf-8"

    def test_decode_header_value_rejects_control_characters(self):
        with pytest.raises(DecodeError):
            decode_header_value(b"text/plain\x01")


class TestRoundTrip:
    """Tests for execute() against a mocked transport."""

    def test_execute_sends_json_content_type_and_body(self, capsys):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201, json={"id": 1, "body": "buy milk", "completed": False})

        spec = RequestSpec("http://api.test/v1/todos", "POST", '{"body":"buy milk"}')
        asyncio.run(make_runner(handler, color=False).execute(spec))

        assert len(seen) == 1
        assert seen[0].headers["content-type"] == "application/json"
        assert seen[0].content == b'{"body":"buy milk"}'
        captured = capsys.readouterr()
        assert json.loads(captured.out)["id"] == 1
        assert "Status: 201" in captured.err

    def test_run_without_body_sends_empty_content(self, capsys):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, headers={"Content-Type": "text/plain"}, content=b"ok")

        make_runner(handler, color=False).run(RequestSpec("http://api.test/v1/todos/3", "DELETE"))

        assert seen[0].method == "DELETE"
        assert seen[0].content == b""
        assert seen[0].headers["content-type"] == "application/json"
        assert capsys.readouterr().out == "ok\n"

    def test_api_key_header(self, capsys):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, content=b"")

        make_runner(handler, api_key="secret").run(RequestSpec("http://api.test/v1/todos", "GET"))
        assert seen[0].headers["x-api-key"] == "secret"

    def test_transport_error_propagates(self, capsys):
        def handler(request):
            raise httpx.ConnectError("Name or service not known")

        with pytest.raises(TransportError) as exc_info:
            make_runner(handler).run(RequestSpec("http://nowhere.invalid/v1/todos", "GET"))
        assert exc_info.value.method == "GET"
        assert exc_info.value.url == "http://nowhere.invalid/v1/todos"
        assert "Name or service not known" in exc_info.value.message
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
