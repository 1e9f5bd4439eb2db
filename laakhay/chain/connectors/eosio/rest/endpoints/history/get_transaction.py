"""History transaction endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import history_path
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return history_path("get_transaction")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"id": params["tx_id"]}


SPEC = RestEndpointSpec(
    id="get_transaction",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Returns the transaction trace, or None for an empty answer."""

    def parse(self, response: Any, params: dict[str, Any]) -> dict[str, Any] | None:
        return response or None
