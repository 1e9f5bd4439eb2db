"""Chain info endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import chain_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("get_info")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {}


SPEC = RestEndpointSpec(
    id="get_info",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Returns the info object unchanged (chain id, head block, ...)."""

    def parse(self, response: Any, params: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(response, dict):
            raise MalformedResponseError(f"Invalid get_info response: {type(response).__name__}")
        return response
