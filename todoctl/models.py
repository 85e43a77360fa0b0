"""
Commands, request specs and response outcomes.

A command is one of five frozen dataclasses. build_request_spec() turns a
command and a base URL into the single request the client will send.
"""
import json
from dataclasses import dataclass
from typing import Optional, Union

from todoctl.uri import compose_url, todo_path

GET = "GET"
POST = "POST"
PUT = "PUT"
DELETE = "DELETE"


@dataclass(frozen=True)
class ListTodos:
    """List all todos."""


@dataclass(frozen=True)
class CreateTodo:
    """Create a new todo."""
    body: str


@dataclass(frozen=True)
class ReadTodo:
    """Read a todo."""
    id: int


@dataclass(frozen=True)
class UpdateTodo:
    """Update a todo."""
    id: int
    body: str
    completed: bool = False


@dataclass(frozen=True)
class DeleteTodo:
    """Delete a todo."""
    id: int


TodoCommand = Union[ListTodos, CreateTodo, ReadTodo, UpdateTodo, DeleteTodo]


@dataclass(frozen=True)
class RequestSpec:
    """One HTTP request: absolute URL, method and optional UTF-8 JSON body."""
    url: str
    method: str
    body: Optional[str] = None


@dataclass(frozen=True)
class ResponseOutcome:
    """
    A fully received response.

    content_type holds the raw header bytes, or None when the server sent no
    Content-Type header.
    """
    status_code: int
    content_type: Optional[bytes]
    body: bytes


def encode_body(payload: dict) -> str:
    """Serialize a request payload as compact JSON."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def build_request_spec(command: TodoCommand, base_url: str) -> RequestSpec:
    """
    Derive the request for a command.

    Args:
        command: The parsed command
        base_url: User-supplied base URL (scheme and authority are kept)

    Returns:
        RequestSpec for the command

    Raises:
        UriBuildError: If the base URL cannot produce a request URI
        TypeError: If command is not one of the known command types
    """
    if isinstance(command, ListTodos):
        return RequestSpec(compose_url(base_url, todo_path()), GET)
    if isinstance(command, CreateTodo):
        return RequestSpec(
            compose_url(base_url, todo_path()),
            POST,
            encode_body({"body": command.body}),
        )
    if isinstance(command, ReadTodo):
        return RequestSpec(compose_url(base_url, todo_path(command.id)), GET)
    if isinstance(command, UpdateTodo):
        return RequestSpec(
            compose_url(base_url, todo_path(command.id)),
            PUT,
            encode_body({"body": command.body, "completed": command.completed}),
        )
    if isinstance(command, DeleteTodo):
        return RequestSpec(compose_url(base_url, todo_path(command.id)), DELETE)
    raise TypeError(f"Unsupported command: {command!r}")
