"""Table-by-scope endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import DEFAULT_SCOPE_LIMIT, chain_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.models import TablePage
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("get_table_by_scope")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {
        "code": params["code"],
        "lower_bound": params.get("lower_bound") or "",
        "upper_bound": params.get("upper_bound") or "",
        "limit": int(params.get("limit") or DEFAULT_SCOPE_LIMIT),
    }
    if params.get("table"):
        body["table"] = params["table"]
    return body


SPEC = RestEndpointSpec(
    id="get_table_by_scope",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Scope rows (``{code, scope, table, payer, count}``); ``more`` is the next scope."""

    def parse(self, response: Any, params: dict[str, Any]) -> TablePage:
        if not isinstance(response, dict):
            raise MalformedResponseError(f"Invalid get_table_by_scope response for {params['code']!r}")
        return TablePage.model_validate(response)
