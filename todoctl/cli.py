#!/usr/bin/env python3
"""
Command-line interface for the todo API client.
"""
import logging
import sys

import click
from pydantic import ValidationError

from todoctl.config import get_settings
from todoctl.exceptions import TodoctlError
from todoctl.models import (
    CreateTodo,
    DeleteTodo,
    ListTodos,
    ReadTodo,
    TodoCommand,
    UpdateTodo,
    build_request_spec,
)
from todoctl.runner import RequestRunner

logger = logging.getLogger(__name__)

# Todo ids are signed 64-bit integers on the server side.
TODO_ID = click.IntRange(min=-(2 ** 63), max=2 ** 63 - 1)


def configure_logging(level: str, fmt: str) -> None:
    """Send log records to stderr so stdout carries only response bodies."""
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr)


def execute(ctx: click.Context, command: TodoCommand) -> None:
    """Build the request for a command, run it, and exit 1 on failure."""
    try:
        spec = build_request_spec(command, ctx.obj['url'])
        logger.debug(f"{command!r} -> {spec.method} {spec.url}")
        runner = RequestRunner(api_key=ctx.obj['api_key'], color=ctx.obj['color'])
        runner.run(spec)
    except TodoctlError as e:
        logger.debug(f"Request failed: {e.to_dict()}")
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


@click.group()
@click.argument('url')
@click.option('--api-key', envvar='TODOCTL_API_KEY', default=None,
              help='API key sent as X-API-Key')
@click.option('--no-color', is_flag=True, default=False,
              help='Disable colored output')
@click.option('-v', '--verbose', is_flag=True, default=False,
              help='Enable debug logging on stderr')
@click.pass_context
def cli(ctx, url, api_key, no_color, verbose):
    """Client for a todo list API served at URL (scheme and host, e.g. http://localhost:8000)."""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    configure_logging('DEBUG' if verbose else settings.log_level, settings.log_format)

    ctx.ensure_object(dict)
    ctx.obj['url'] = url
    ctx.obj['api_key'] = api_key or settings.api_key
    ctx.obj['color'] = settings.color and not no_color


@cli.command(name='list')
@click.pass_context
def list_todos(ctx):
    """List all todos."""
    execute(ctx, ListTodos())


@cli.command()
@click.argument('body')
@click.pass_context
def create(ctx, body):
    """Create a new todo with BODY."""
    execute(ctx, CreateTodo(body=body))


@cli.command()
@click.argument('todo_id', metavar='ID', type=TODO_ID)
@click.pass_context
def read(ctx, todo_id):
    """Read the todo with ID."""
    execute(ctx, ReadTodo(id=todo_id))


@cli.command()
@click.argument('todo_id', metavar='ID', type=TODO_ID)
@click.argument('body')
@click.option('-c', '--completed', is_flag=True, default=False,
              help='Mark todo as completed')
@click.pass_context
def update(ctx, todo_id, body, completed):
    """Replace the BODY and completion state of the todo with ID."""
    execute(ctx, UpdateTodo(id=todo_id, body=body, completed=completed))


@cli.command()
@click.argument('todo_id', metavar='ID', type=TODO_ID)
@click.pass_context
def delete(ctx, todo_id):
    """Delete the todo with ID."""
    execute(ctx, DeleteTodo(id=todo_id))


def main():
    """Console script entry point."""
    cli(prog_name='todoctl')


if __name__ == '__main__':
    main()
