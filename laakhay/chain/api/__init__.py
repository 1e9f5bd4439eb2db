"""High-level API facades."""

from .chain_api import ChainAPI, TransactionSubmitter

__all__ = [
    "ChainAPI",
    "TransactionSubmitter",
]
