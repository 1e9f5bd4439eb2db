"""Signature authorization against account permissions.

A signature authorizes an account permission when the recovered key is one of
the permission's keys, or when a validator plugin vouches for one of the
``actor@permission`` pairs the permission delegates to (e.g. a contract's
``eosio.code`` permission).
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.exceptions import SignatureError
from ..models import AccountInfo
from .keys import normalize_public_key, recover_public_key

logger = logging.getLogger(__name__)

# (account, recovered_key, api) -> truthy when the plugin accepts the signer
Validator = Callable[[str, str, Any], Any]


@dataclass
class SignPlugin:
    """Validators keyed by the delegated permission they speak for.

    Example:
        >>> plugin = SignPlugin({"mycontract@eosio.code": check_registry})
    """

    validator_provider: Mapping[str, Validator] = field(default_factory=dict)


class SignatureAuthorizer:
    """Checks recovered signers against an account's authority."""

    def __init__(
        self,
        get_account: Callable[[str], Awaitable[AccountInfo]],
        *,
        recover: Callable[[str, str | bytes], str] = recover_public_key,
        context: Any = None,
    ) -> None:
        """Initialize the authorizer.

        Args:
            get_account: Async account lookup
            recover: Public-key recovery function
            context: Passed to validators as their third argument
        """
        self._get_account = get_account
        self._recover = recover
        self._context = context

    def recover(self, signature: str, message: str | bytes) -> str:
        return self._recover(signature, message)

    async def authorize(
        self,
        signature: str,
        message: str | bytes,
        account: str,
        authority: str = "active",
        plugins: tuple[SignPlugin, ...] | list[SignPlugin] = (),
    ) -> str | None:
        """Return the recovered key if it satisfies ``account@authority``.

        Returns:
            The recovered public key, or None when the signer is not authorized
        """
        recovered = self._recover(signature, message)
        info = await self._get_account(account)

        perm = info.find_permission(authority)
        if perm is None:
            logger.warning(f"Permission {authority} of account {account} not found")
            return None

        auth = perm.required_auth
        for key_weight in auth.keys:
            if _same_key(key_weight.key, recovered):
                return key_weight.key

        if not plugins:
            return None

        delegated = [str(level.permission) for level in auth.accounts]
        logger.debug(f"Trying plugins for {account}@{authority}: {delegated}")
        for plugin in plugins:
            for level in delegated:
                validator = plugin.validator_provider.get(level)
                if validator is None:
                    continue
                verdict = validator(account, recovered, self._context)
                if inspect.isawaitable(verdict):
                    verdict = await verdict
                if verdict:
                    return recovered

        return None


def _same_key(listed: str, recovered: str) -> bool:
    if listed == recovered:
        return True
    try:
        return normalize_public_key(listed) == recovered
    except SignatureError:
        # Non-K1 keys (R1, WebAuthn) never match a recovered K1 key
        return False
