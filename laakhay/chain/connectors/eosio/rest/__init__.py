"""EOSIO REST connector and endpoint registry."""

from .endpoints import get_endpoint_adapter, get_endpoint_spec, list_endpoints
from .provider import EosRESTConnector

__all__ = ["EosRESTConnector", "get_endpoint_spec", "get_endpoint_adapter", "list_endpoints"]
