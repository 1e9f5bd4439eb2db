"""History actions endpoint definition and adapter.

``pos`` is the account action sequence to start from and ``offset`` the number
of further actions, so one request covers ``[pos, pos + offset]``.
"""

from __future__ import annotations

from typing import Any

from laakhay.chain.connectors.eosio.config import history_path
from laakhay.chain.core.exceptions import MalformedResponseError
from laakhay.chain.models import ActionPage
from laakhay.chain.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return history_path("get_actions")


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {"account_name": params["account"]}
    # Without pos/offset the node returns the most recent actions
    if params.get("pos") is not None:
        body["pos"] = int(params["pos"])
        body["offset"] = int(params.get("offset", 0))
    return body


SPEC = RestEndpointSpec(
    id="get_actions",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing ``get_actions`` into an ActionPage."""

    def parse(self, response: Any, params: dict[str, Any]) -> ActionPage:
        if not isinstance(response, dict) or not isinstance(response.get("actions"), list):
            raise MalformedResponseError(
                f"Cannot find actions of {params['account']} "
                f"(pos: {params.get('pos')}, offset: {params.get('offset')})"
            )
        return ActionPage.model_validate(response)
