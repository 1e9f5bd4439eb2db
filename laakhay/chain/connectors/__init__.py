"""Node connectors."""

from .eosio import EosRESTConnector

__all__ = ["EosRESTConnector"]
