"""Currency balance endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import DEFAULT_TOKEN_CONTRACT, chain_path
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("get_currency_balance")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    body = {
        "code": params.get("code") or DEFAULT_TOKEN_CONTRACT,
        "account": params["account"],
    }
    if params.get("symbol"):
        body["symbol"] = params["symbol"]
    return body


SPEC = RestEndpointSpec(
    id="get_currency_balance",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Asset strings such as ``"1.0000 EOS"``, whitespace-stripped."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[str]:
        return [str(v).strip() for v in (response or [])]
