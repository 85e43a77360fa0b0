"""
RequestRunner - performs the single HTTP round-trip and renders the response.

Diagnostics (status line and Content-Type) go to stderr; the body goes to
stdout. JSON bodies are pretty-printed and colorized with rich, everything
else is printed verbatim.
"""
import asyncio
import json
import logging
from typing import Callable, Optional

import click
from rich.console import Console

from todoctl.adapters.http_client import AsyncHTTPClientAdapter, HTTPClientAdapterFactory
from todoctl.exceptions import DecodeError, FormatError
from todoctl.models import RequestSpec, ResponseOutcome

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def decode_body(body: bytes) -> str:
    """Decode a response body as strict UTF-8."""
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Response body is not valid UTF-8: {e}", original_error=e) from e


def decode_header_value(raw: bytes) -> str:
    """
    Decode a raw header value.

    Only visible ASCII and horizontal tab are accepted; anything else fails
    the whole operation instead of being printed garbled.
    """
    try:
        value = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Content-Type header is not ASCII: {raw!r}", original_error=e) from e
    if any(ch != "\t" and not (" " <= ch <= "~") for ch in value):
        raise DecodeError(f"Content-Type header contains control characters: {raw!r}")
    return value


class RequestRunner:
    """Executes one RequestSpec and prints the outcome."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        color: bool = True,
        force_terminal: Optional[bool] = None,
        client_factory: Optional[Callable[[], AsyncHTTPClientAdapter]] = None,
    ):
        """
        Args:
            api_key: Sent as X-API-Key when set
            color: Colorize the status line and JSON output
            force_terminal: Passed to rich; None lets it detect whether stdout is a TTY
            client_factory: Builds the HTTP adapter (defaults to the httpx factory)
        """
        self.api_key = api_key
        self.color = color
        self.force_terminal = force_terminal
        self._client_factory = client_factory or HTTPClientAdapterFactory.create_async_client

    def build_headers(self) -> dict:
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    async def fetch(self, spec: RequestSpec) -> ResponseOutcome:
        """Send the request and wait for the full response."""
        content = spec.body.encode("utf-8") if spec.body is not None else b""
        async with self._client_factory() as client:
            return await client.request(
                spec.method,
                spec.url,
                content=content,
                headers=self.build_headers(),
            )

    async def execute(self, spec: RequestSpec) -> None:
        """
        Perform the round-trip and render the response.

        Raises:
            TransportError: If the request could not be completed
            DecodeError: If the body or Content-Type header cannot be decoded
            FormatError: If a JSON response does not parse
        """
        outcome = await self.fetch(spec)
        self.render(outcome)

    def run(self, spec: RequestSpec) -> None:
        """Run execute() to completion on a fresh event loop."""
        asyncio.run(self.execute(spec))

    def render(self, outcome: ResponseOutcome) -> None:
        """Print status, Content-Type and body according to the content type."""
        text = decode_body(outcome.body)
        content_type = None
        if outcome.content_type is not None:
            content_type = decode_header_value(outcome.content_type)

        echo_color = None if self.color else False
        click.echo(
            f"Status: {click.style(str(outcome.status_code), fg='green')}",
            err=True,
            color=echo_color,
        )

        if content_type is None:
            self.echo_body(text)
            return

        click.echo(
            f"Content-Type: {click.style(content_type, fg='green')}",
            err=True,
            color=echo_color,
        )
        if content_type.startswith(JSON_CONTENT_TYPE):
            self.print_json(text, content_type)
        else:
            self.echo_body(text)

    def echo_body(self, text: str) -> None:
        # color=True keeps click from stripping escape codes the server sent.
        click.echo(text, color=True)

    def print_json(self, text: str, content_type: str) -> None:
        console = Console(no_color=not self.color, force_terminal=self.force_terminal)
        try:
            console.print_json(text, highlight=self.color)
        except json.JSONDecodeError as e:
            logger.debug(f"Failed to parse {len(text)} characters as JSON")
            raise FormatError(content_type, original_error=e) from e
