"""abi_json_to_bin endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import chain_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("abi_json_to_bin")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {
        "code": params["code"],
        "action": params["action"],
        "args": params["args"],
    }


SPEC = RestEndpointSpec(
    id="abi_json_to_bin",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Extracts the hex-encoded ``binargs``."""

    def parse(self, response: Any, params: dict[str, Any]) -> str:
        if not isinstance(response, dict) or "binargs" not in response:
            raise MalformedResponseError(
                f"abi_json_to_bin returned no binargs for {params['code']}::{params['action']}"
            )
        return str(response["binargs"])
