"""Shared EOSIO node constants.

This module centralizes the node URL, RPC paths and scan defaults used by the
REST connector and the ChainAPI facade.
"""

from __future__ import annotations

import os

from laakhay.chain.runtime.scanning.definitions import (
    DEFAULT_CONCURRENCY,
    DEFAULT_CURSOR_LIMIT,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_POLL_INTERVAL,
    MAX_KEY,
)

DEFAULT_RPC_URL = "http://127.0.0.1:8888"
RPC_URL_ENV = "LAAKHAY_CHAIN_RPC_URL"

# HTTP-level timeout; history windows carry their own (DEFAULT_FETCH_TIMEOUT)
DEFAULT_HTTP_TIMEOUT = 30.0

CHAIN_API_PREFIX = "/v1/chain"
HISTORY_API_PREFIX = "/v1/history"

DEFAULT_TOKEN_CONTRACT = "eosio.token"
DEFAULT_AUTHORITY = "active"

# Write payloads kept for diagnostics
STORYBOARD_CAPACITY = 1000

# Transaction lookup polling (rounds, seconds between rounds)
WAIT_TX_MAX_ROUNDS = 12
WAIT_TX_INTERVAL = 1.009

DEFAULT_TABLE_LIMIT = 10
DEFAULT_SCOPE_LIMIT = 1000


def get_rpc_url(base_url: str | None = None) -> str:
    """Resolve the node URL.

    Resolution order:
        1. Explicit ``base_url``
        2. ``LAAKHAY_CHAIN_RPC_URL`` environment variable
        3. DEFAULT_RPC_URL

    Examples:
        >>> get_rpc_url("https://eos.example.com")
        'https://eos.example.com'
    """
    if base_url:
        return base_url
    return os.environ.get(RPC_URL_ENV, DEFAULT_RPC_URL)


def chain_path(method: str) -> str:
    """Path of a chain API method, e.g. ``chain_path("get_info")``."""
    return f"{CHAIN_API_PREFIX}/{method}"


def history_path(method: str) -> str:
    """Path of a history API method, e.g. ``history_path("get_actions")``."""
    return f"{HISTORY_API_PREFIX}/{method}"


__all__ = [
    "DEFAULT_RPC_URL",
    "RPC_URL_ENV",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_FETCH_TIMEOUT",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_CURSOR_LIMIT",
    "DEFAULT_TOKEN_CONTRACT",
    "DEFAULT_AUTHORITY",
    "DEFAULT_TABLE_LIMIT",
    "DEFAULT_SCOPE_LIMIT",
    "MAX_KEY",
    "STORYBOARD_CAPACITY",
    "WAIT_TX_MAX_ROUNDS",
    "WAIT_TX_INTERVAL",
    "chain_path",
    "history_path",
    "get_rpc_url",
]
