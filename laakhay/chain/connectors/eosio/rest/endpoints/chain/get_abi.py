"""Contract ABI endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import chain_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("get_abi")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"account_name": params["code"]}


SPEC = RestEndpointSpec(
    id="get_abi",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Returns ``{"account_name": ..., "abi": {...}}``.

    Accounts without a contract come back with no ``abi`` key; that is
    normalized to ``abi: None`` rather than treated as an error.
    """

    def parse(self, response: Any, params: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(response, dict):
            raise MalformedResponseError(f"Invalid get_abi response for {params['code']!r}")
        return {"account_name": response.get("account_name", params["code"]), "abi": response.get("abi")}
