"""Laakhay Chain - Complete enumeration over EOSIO-style ledger RPC nodes."""

from .api import ChainAPI, TransactionSubmitter
from .auth import SignatureAuthorizer, SignPlugin, recover_public_key
from .connectors.eosio import EosRESTConnector
from .core import (
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
    decode_name,
    encode_name,
)
from .models import (
    AccountInfo,
    ActionPage,
    Permission,
    PermissionLevel,
    Row,
    TablePage,
    TableRef,
)
from .runtime.scanning import (
    MAX_KEY,
    BatchDispatcher,
    CursorPaginator,
    KeyRange,
    RangePartitioner,
    ScanPolicy,
    SequenceScanner,
)
from .utils import StoryBoard

__version__ = "0.1.0"

__all__ = [
    # Facade
    "ChainAPI",
    "TransactionSubmitter",
    # Connectors
    "EosRESTConnector",
    # Scanners
    "MAX_KEY",
    "KeyRange",
    "ScanPolicy",
    "RangePartitioner",
    "CursorPaginator",
    "SequenceScanner",
    "BatchDispatcher",
    # Models
    "Row",
    "TableRef",
    "TablePage",
    "ActionPage",
    "AccountInfo",
    "Permission",
    "PermissionLevel",
    # Auth
    "SignatureAuthorizer",
    "SignPlugin",
    "recover_public_key",
    "StoryBoard",
    # Names
    "encode_name",
    "decode_name",
    # Exceptions
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
]
