"""Account endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from laakhay.chain.connectors.eosio.config import chain_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.models import AccountInfo
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return chain_path("get_account")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"account_name": params["account"]}


SPEC = RestEndpointSpec(
    id="get_account",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing ``get_account`` into AccountInfo."""

    def parse(self, response: Any, params: dict[str, Any]) -> AccountInfo:
        if not isinstance(response, dict):
            raise MalformedResponseError(f"Invalid get_account response for {params['account']!r}")
        try:
            return AccountInfo.model_validate(response)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Cannot parse account {params['account']!r}: {e}"
            ) from e
