"""Contract table identity and table page models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Row = dict[str, Any]


class TableRef(BaseModel):
    """Identity of a contract table: ``code`` / ``table`` / ``scope``."""

    code: str = Field(..., min_length=1)
    table: str = Field(..., min_length=1)
    scope: str = Field(..., min_length=1)

    @field_validator("scope", mode="before")
    @classmethod
    def coerce_scope(cls, v: Any) -> Any:
        """Numeric scopes are sent as strings."""
        if isinstance(v, int):
            return str(v)
        return v

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def __str__(self) -> str:
        return f"{self.code}/{self.scope}/{self.table}"


class TablePage(BaseModel):
    """One ``get_table_rows`` response.

    ``more`` is the truncation flag: when False, ``rows`` holds every row in
    the requested bounds. Newer nodes report ``more`` as the next key string
    instead of a bool; it is normalized here and kept in ``next_key``.
    """

    rows: list[Row] = Field(default_factory=list)
    more: bool = False
    next_key: str | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_more(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        more = data.get("more")
        if isinstance(more, str):
            data = {**data, "more": bool(more), "next_key": data.get("next_key") or more or None}
        elif data.get("next_key") == "":
            data = {**data, "next_key": None}
        if data.get("rows") is None:
            data = {**data, "rows": []}
        return data

    @property
    def truncated(self) -> bool:
        """Alias for ``more``."""
        return self.more
