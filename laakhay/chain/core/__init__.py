"""Core components."""

from .exceptions import (
    ChainError,
    InvalidRange,
    MalformedResponseError,
    MissingCursorKey,
    PermissionNotFoundError,
    RateLimitError,
    RpcError,
    SignatureError,
    TransportError,
    TransportTimeout,
)
from .names import decode_name, encode_name

__all__ = [
    "ChainError",
    "TransportError",
    "TransportTimeout",
    "RateLimitError",
    "RpcError",
    "MissingCursorKey",
    "InvalidRange",
    "MalformedResponseError",
    "PermissionNotFoundError",
    "SignatureError",
    "encode_name",
    "decode_name",
]
