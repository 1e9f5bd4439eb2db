"""Data models for ledger RPC responses.

Architecture:
    This module exports the Pydantic v2 models used throughout the library.
    Models are immutable (frozen=True). Table rows and history actions stay
    plain dicts: their schema is defined by each contract, and the scanners
    only read the one field they paginate on through an injected accessor.

Model Categories:
    - Tables: TableRef, TablePage
    - History: ActionPage
    - Accounts: AccountInfo, Permission, RequiredAuth, KeyWeight,
      PermissionLevel, PermissionLevelWeight
"""

from .account import (
    AccountInfo,
    KeyWeight,
    Permission,
    PermissionLevel,
    PermissionLevelWeight,
    RequiredAuth,
)
from .actions import SEQUENCE_FIELD, ActionPage, action_seq
from .table import Row, TablePage, TableRef

__all__ = [
    "AccountInfo",
    "ActionPage",
    "KeyWeight",
    "Permission",
    "PermissionLevel",
    "PermissionLevelWeight",
    "RequiredAuth",
    "Row",
    "SEQUENCE_FIELD",
    "TablePage",
    "TableRef",
    "action_seq",
]
