"""History plugin action window model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SEQUENCE_FIELD = "account_action_seq"


class ActionPage(BaseModel):
    """One ``get_actions`` window.

    Actions arrive in ascending ``account_action_seq`` order; the sequence is
    per account and has no gaps on a healthy history node.
    """

    actions: list[dict[str, Any]] = Field(default_factory=list)
    last_irreversible_block: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def max_seq(self) -> int | None:
        """Sequence number of the last action, or None for an empty window."""
        if not self.actions:
            return None
        return self.actions[-1].get(SEQUENCE_FIELD)


def action_seq(action: dict[str, Any]) -> int:
    """Default sequence accessor for history actions."""
    return int(action[SEQUENCE_FIELD])
