"""
Request URI composition for the todo API.

Every request URI keeps the scheme and authority of the user-supplied base URL
and replaces everything after the authority with a fixed API path.
"""
import logging
from typing import Optional

import httpx

from todoctl.exceptions import UriBuildError

logger = logging.getLogger(__name__)

TODOS_PATH = "/v1/todos"


def todo_path(todo_id: Optional[int] = None) -> str:
    """Return the collection path, or the item path when an id is given."""
    if todo_id is None:
        return TODOS_PATH
    return f"{TODOS_PATH}/{int(todo_id)}"


def compose_url(base_url: str, path: str) -> str:
    """
    Build an absolute request URI from a base URL and an API path.

    Query and fragment of the base URL are dropped.

    Args:
        base_url: User-supplied root, e.g. http://localhost:8000
        path: Absolute API path, e.g. /v1/todos/42

    Returns:
        The composed URI as a string

    Raises:
        UriBuildError: If the base URL has no scheme or authority, or cannot
            be parsed at all
    """
    try:
        base = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise UriBuildError(base_url, original_error=e) from e

    if not base.scheme or not base.host:
        raise UriBuildError(base_url)

    try:
        url = base.copy_with(path=path, query=None, fragment=None)
    except httpx.InvalidURL as e:
        raise UriBuildError(
            base_url,
            message=f"Cannot build request URI for path '{path}' from '{base_url}': {e}",
            original_error=e,
        ) from e

    logger.debug(f"Composed request URI {url}")
    return str(url)
