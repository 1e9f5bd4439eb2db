"""Block endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import chain_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("get_block")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    """Block number or block id, as given."""
    return {"block_num_or_id": params["block_num_or_id"]}


SPEC = RestEndpointSpec(
    id="get_block",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(response, dict):
            raise MalformedResponseError(
                f"Invalid get_block response for {params['block_num_or_id']!r}"
            )
        return response
