"""
Standard exceptions for the todoctl client.
"""
from todoctl.exceptions.errors import (
    TodoctlError,
    UriBuildError,
    TransportError,
    DecodeError,
    FormatError,
)

__all__ = [
    "TodoctlError",
    "UriBuildError",
    "TransportError",
    "DecodeError",
    "FormatError",
]
