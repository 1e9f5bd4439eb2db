"""Account and permission models for ``get_account``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class KeyWeight(BaseModel):
    """Public key entry of an authority."""

    key: str = Field(..., min_length=1)
    weight: int = Field(1, ge=0)

    model_config = ConfigDict(frozen=True)


class PermissionLevel(BaseModel):
    """``actor@permission`` pair."""

    actor: str = Field(..., min_length=1)
    permission: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.actor}@{self.permission}"


class PermissionLevelWeight(BaseModel):
    """Delegated account entry of an authority."""

    permission: PermissionLevel
    weight: int = Field(1, ge=0)

    model_config = ConfigDict(frozen=True)


class RequiredAuth(BaseModel):
    """Authority required by a permission."""

    threshold: int = Field(1, ge=0)
    keys: list[KeyWeight] = Field(default_factory=list)
    accounts: list[PermissionLevelWeight] = Field(default_factory=list)
    waits: list[dict] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def has_key(self, key: str) -> bool:
        return any(k.key == key for k in self.keys)


class Permission(BaseModel):
    """Named permission of an account."""

    perm_name: str = Field(..., min_length=1)
    parent: str = ""
    required_auth: RequiredAuth = Field(default_factory=RequiredAuth)

    model_config = ConfigDict(frozen=True)


class AccountInfo(BaseModel):
    """Subset of ``get_account`` used by key lookups and authorization.

    Fields not modelled here (resources, voter info, ...) are kept as extras.
    """

    account_name: str = Field(..., min_length=1)
    permissions: list[Permission] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")

    def find_permission(self, name: str) -> Permission | None:
        """Return the permission called ``name``, if the account has one."""
        for perm in self.permissions:
            if perm.perm_name == name:
                return perm
        return None
