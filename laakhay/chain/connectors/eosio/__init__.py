"""EOSIO connector implementation."""

from .rest.provider import EosRESTConnector

__all__ = ["EosRESTConnector"]
