"""EOSIO REST endpoint registry.

Maps endpoint ids to their (spec, adapter) pair so the connector can resolve
any RPC by name.
"""

from __future__ import annotations

from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec

from .chain import (
    abi_json_to_bin,
    get_abi,
    get_account,
    get_block,
    get_currency_balance,
    get_info,
    get_table_by_scope,
    get_table_rows,
)
from .history import get_actions, get_transaction

_ENDPOINTS = {
    module.SPEC.id: (module.SPEC, module.Adapter)
    for module in (
        get_info,
        get_block,
        get_abi,
        abi_json_to_bin,
        get_account,
        get_currency_balance,
        get_table_rows,
        get_table_by_scope,
        get_actions,
        get_transaction,
    )
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Return the spec registered under ``endpoint_id``."""
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    """Return the adapter class registered under ``endpoint_id``."""
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints() -> list[str]:
    return sorted(_ENDPOINTS)


__all__ = ["get_endpoint_spec", "get_endpoint_adapter", "list_endpoints"]
