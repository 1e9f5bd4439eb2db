"""Table rows endpoint definition and adapter.

This is the bounded range read the table scanners are built on: one request
returns at most one page and reports whether rows were left out (``more``).
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from laakhay.chain.connectors.eosio.config import chain_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.models import TablePage, TableRef
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("get_table_rows")


def _bound(value: Any) -> Any:
    # -1 / None mean unbounded; the node takes an empty bound for that
    if value is None or value == -1 or value == "-1":
        return ""
    return str(value) if isinstance(value, int) else value


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    """Build the JSON body.

    Integer bounds are sent as decimal strings so uint64 keys above 2**53
    survive JSON number handling on the node side.
    """
    table: TableRef = params["table"]
    body: dict[str, Any] = {
        "json": True,
        "code": table.code,
        "scope": table.scope,
        "table": table.table,
        "limit": int(params.get("limit", 10)),
        "lower_bound": _bound(params.get("lower_bound")),
        "upper_bound": _bound(params.get("upper_bound")),
    }
    index_position = params.get("index_position")
    if index_position is not None and index_position != 1:
        body["index_position"] = index_position
        if params.get("key_type"):
            body["key_type"] = params["key_type"]
    return body


SPEC = RestEndpointSpec(
    id="get_table_rows",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing ``get_table_rows`` into a TablePage."""

    def parse(self, response: Any, params: dict[str, Any]) -> TablePage:
        if not isinstance(response, dict):
            raise MalformedResponseError(f"Invalid get_table_rows response for {params['table']}")
        try:
            return TablePage.model_validate(response)
        except ValidationError as e:
            raise MalformedResponseError(f"Cannot parse rows of {params['table']}: {e}") from e
