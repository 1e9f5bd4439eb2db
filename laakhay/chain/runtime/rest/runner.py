"""REST request runner using endpoint specs and response adapters.

Every nodeos RPC is described by a RestEndpointSpec (how to build the path and
JSON body from call params) and a ResponseAdapter (how to turn the decoded
JSON into a model). The runner executes exactly one request per call;
pagination over many requests lives in ``runtime.scanning``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from .transport import RESTTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST"; nodeos chain and history APIs are POST
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_body: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


class RestRunner:
    def __init__(self, transport: RESTTransport) -> None:
        self._t = transport

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        body = spec.build_body(params) if spec.build_body else None
        headers = spec.build_headers(params) if spec.build_headers else None

        start = perf_counter()
        if spec.method.upper() == "GET":
            data = await self._t.get(path, params=query, headers=headers)
        else:
            data = await self._t.post(path, json_body=body, headers=headers)
        logger.debug(
            "rpc_completed",
            extra={
                "endpoint_id": spec.id,
                "path": path,
                "latency_ms": (perf_counter() - start) * 1000.0,
            },
        )

        return adapter.parse(data, params)
