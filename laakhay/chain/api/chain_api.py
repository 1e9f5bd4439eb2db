"""Ergonomic ChainAPI facade for ledger reads and complete scans.

The ChainAPI wraps an EosRESTConnector and the scanners, offering thin RPC
wrappers (info, blocks, ABIs, accounts, balances) next to the enumeration
entry points that guarantee complete results over truncating reads.

Architecture:
    This module implements the Facade pattern over:
    - EosRESTConnector: one request per call (endpoint spec + adapter)
    - RangePartitioner / CursorPaginator: complete table reads
    - SequenceScanner / BatchDispatcher: complete action log reads
    - SignatureAuthorizer: signature checks against account permissions

Design Decisions:
    - Connector injection allows testing against in-memory nodes
    - Transaction signing stays outside: writes go through an injected
      TransactionSubmitter, and each submitted payload is recorded on a
      bounded StoryBoard
    - Context manager pattern ensures proper resource cleanup
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from functools import partial
from typing import Any, Protocol

from ..auth import SignatureAuthorizer, SignPlugin, recover_public_key
from ..connectors.eosio.config import (
    DEFAULT_AUTHORITY,
    DEFAULT_TABLE_LIMIT,
    DEFAULT_TOKEN_CONTRACT,
    STORYBOARD_CAPACITY,
    WAIT_TX_INTERVAL,
    WAIT_TX_MAX_ROUNDS,
)
from ..connectors.eosio.rest.provider import EosRESTConnector
from ..core.exceptions import ChainError, InvalidRange, PermissionNotFoundError
from ..core.names import encode_name
from ..models import AccountInfo, PermissionLevel, Row, TableRef, action_seq
from ..runtime.scanning import (
    BatchDispatcher,
    CursorPaginator,
    KeyRange,
    PageCallback,
    RangePartitioner,
    ScanPolicy,
    SequenceScanner,
    field_accessor,
)
from ..runtime.scanning.telemetry import log_truncation_advisory
from ..utils import StoryBoard

logger = logging.getLogger(__name__)


class TransactionSubmitter(Protocol):
    """Signs and pushes a transaction; supplied by the application's wallet layer."""

    async def transaction(self, data: dict[str, Any]) -> dict[str, Any]:
        """Submit ``{"actions": [...]}`` and return the node's receipt."""
        ...


def _permission_level(auth: PermissionLevel | dict[str, str] | str) -> PermissionLevel:
    if isinstance(auth, PermissionLevel):
        return auth
    if isinstance(auth, str):
        actor, _, permission = auth.partition("@")
        return PermissionLevel(actor=actor, permission=permission or DEFAULT_AUTHORITY)
    return PermissionLevel.model_validate(auth)


class ChainAPI:
    """High-level facade for reading and enumerating ledger data.

    Example:
        >>> async with ChainAPI("https://eos.example.com") as api:
        ...     table = TableRef(code="eosio.token", table="accounts", scope="alice")
        ...     rows = await api.scan_all_rows(table)
        ...
        ...     await api.scan_all_actions("alice", on_page=print, page_size=100)
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        policy: ScanPolicy | None = None,
        connector: EosRESTConnector | None = None,
        submitter: TransactionSubmitter | None = None,
        storyboard_capacity: int = STORYBOARD_CAPACITY,
    ) -> None:
        """Initialize the ChainAPI.

        Args:
            base_url: Node URL (ignored when a connector is given)
            policy: Scan tuning (defaults to ScanPolicy())
            connector: Optional connector instance (creates one if not provided)
            submitter: Optional transaction submitter for write calls
            storyboard_capacity: Number of write payloads kept for diagnostics
        """
        self._owns_connector = connector is None
        self._connector = connector or EosRESTConnector(base_url)
        self._policy = policy or ScanPolicy()
        self._submitter = submitter
        self._storyboard = StoryBoard(storyboard_capacity)
        self._authorizer = SignatureAuthorizer(self.get_account, context=self)
        self._closed = False

    @property
    def connector(self) -> EosRESTConnector:
        return self._connector

    @property
    def policy(self) -> ScanPolicy:
        return self._policy

    @property
    def storyboard(self) -> StoryBoard:
        """Recently submitted write payloads, oldest first."""
        return self._storyboard

    # ------------------------------------------------------------------
    # Chain
    # ------------------------------------------------------------------

    async def get_info(self) -> dict[str, Any]:
        """Get info of the connected chain."""
        return await self._connector.get_info()

    async def get_block(self, block_num_or_id: int | str) -> dict[str, Any]:
        """Get a block by number or id."""
        return await self._connector.get_block(block_num_or_id)

    async def get_abi(self, code: str) -> dict[str, Any]:
        """Get the ABI of a contract (``abi`` is None for plain accounts)."""
        return await self._connector.get_abi(code)

    async def get_table_abi(self, code: str, table: str) -> dict[str, Any] | None:
        """Get the definition of ``table`` in the contract ABI."""
        abi = (await self.get_abi(code)).get("abi") or {}
        for desc in abi.get("tables", []):
            if desc.get("name") == table:
                return desc
        return None

    async def abi_json_to_bin(self, code: str, action: str, args: Any) -> str:
        """Serialize action arguments with the node's copy of the ABI."""
        return await self._connector.abi_json_to_bin(code, action, args)

    # ------------------------------------------------------------------
    # Accounts and keys
    # ------------------------------------------------------------------

    async def get_account(self, account: str) -> AccountInfo:
        """Get account info (permissions and any extra fields)."""
        return await self._connector.get_account(account)

    async def get_pub_keys(self, account: str, authority: str = DEFAULT_AUTHORITY) -> list[str]:
        """Public keys of ``account@authority``.

        Raises:
            PermissionNotFoundError: If the account has no such permission
        """
        info = await self.get_account(account)
        perm = info.find_permission(authority)
        if perm is None:
            raise PermissionNotFoundError(
                f"Cannot find the permission {authority} of {account}",
                account=account,
                permission=authority,
            )
        return [k.key for k in perm.required_auth.keys]

    async def get_pub_key(self, account: str, authority: str = DEFAULT_AUTHORITY) -> str | None:
        """First public key of ``account@authority``, or None."""
        keys = await self.get_pub_keys(account, authority)
        if not keys:
            logger.warning(f"Cannot find public key for {account}@{authority}")
            return None
        return keys[0]

    def recover_signature(self, signature: str, message: str | bytes) -> str:
        """Recover the public key that produced ``signature`` over ``message``."""
        return recover_public_key(signature, message)

    async def validate_signature(
        self,
        signature: str,
        message: str | bytes,
        account: str,
        authority: str = DEFAULT_AUTHORITY,
        *plugins: SignPlugin,
    ) -> str | None:
        """Check that ``signature`` was made by ``account@authority``.

        Validator plugins are consulted for delegated ``actor@permission``
        entries, keyed by that string, e.g.
        ``SignPlugin({"mycontract@eosio.code": validator})``.

        Returns:
            The matching public key, or None when the signer is not authorized
        """
        return await self._authorizer.authorize(
            signature, message, account, authority, plugins=plugins
        )

    async def get_balances(self, account: str, code: str = DEFAULT_TOKEN_CONTRACT) -> list[str]:
        """All balances of ``account`` in token contract ``code`` ("1.0000 EOS" form)."""
        return await self._connector.get_currency_balance(account, code)

    async def get_balance(
        self,
        account: str,
        code: str = DEFAULT_TOKEN_CONTRACT,
        symbol: str | None = None,
    ) -> str | None:
        """Balance of ``account`` in ``symbol`` (first balance when no symbol is given)."""
        balances = await self.get_balances(account, code)
        if not symbol:
            logger.warning(
                f"Token symbol not specified, returning the first balance of {balances}"
            )
            return balances[0] if balances else None
        for balance in balances:
            if balance.endswith(f" {symbol}"):
                return balance
        return None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def get_recent_actions(self, account: str) -> list[Row]:
        """Most recent actions of ``account``."""
        return (await self._connector.fetch_recent_actions(account)).actions

    async def get_action_max_seq(self, account: str) -> int:
        """Highest action sequence of ``account``; -1 if it has no actions."""
        page = await self._connector.fetch_recent_actions(account)
        return action_seq(page.actions[-1]) if page.actions else -1

    async def get_action_count(self, account: str) -> int:
        return await self.get_action_max_seq(account) + 1

    def _sequence_scanner(self, account: str) -> SequenceScanner:
        return SequenceScanner(
            partial(self._connector.fetch_sequence_window, account),
            timeout=self._policy.fetch_timeout,
            scan_id=f"actions:{account}",
        )

    async def scan_actions(
        self,
        account: str,
        start_pos: int = 0,
        offset: int = 0,
        timeout: float | None = None,
    ) -> list[Row]:
        """Actions of ``account`` with sequence numbers ``[start_pos, start_pos + offset]``.

        Check ``get_action_count`` first to avoid walking a huge log.
        """
        return await self._sequence_scanner(account).scan_window(start_pos, offset, timeout)

    async def scan_all_actions(
        self,
        account: str,
        on_page: PageCallback | None,
        start_pos: int = 0,
        page_size: int | None = None,
        concurrency: int | None = None,
    ) -> bool:
        """Deliver every action of ``account`` from ``start_pos`` in pages.

        Args:
            account: Account whose action log is read
            on_page: Receives each page of actions, in sequence order
            start_pos: First sequence number
            page_size: Actions per page (defaults to the policy's)
            concurrency: Pages fetched concurrently (defaults to the policy's)

        Returns:
            True once the log is exhausted; False if ``on_page`` is None
        """
        dispatcher = BatchDispatcher(
            self._sequence_scanner(account),
            retry_delay=self._policy.retry_delay,
            scan_id=f"actions:{account}",
        )
        logger.info(
            f"Scanning actions of {account} from {start_pos} "
            f"(page_size: {page_size or self._policy.page_size}, "
            f"concurrency: {concurrency or self._policy.concurrency})"
        )
        return await dispatcher.scan_all_batches(
            on_page,
            start_pos=start_pos,
            page_size=page_size or self._policy.page_size,
            concurrency=concurrency or self._policy.concurrency,
        )

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    async def scan_all_rows(
        self,
        table: TableRef,
        lower: int | str | None = 0,
        upper: int | str | None = None,
        hints: Iterable[int | str] = (),
        index_position: int = 1,
    ) -> list[Row]:
        """Every row of a numeric-keyed table between ``lower`` and ``upper``.

        Bounds cannot be account names. With ``hints`` (key boundaries such as
        quarters of the key space) the scan starts from a balanced partition
        and needs fewer round trips.

        Returns:
            All rows, each exactly once, in no particular order
        """
        partitioner = RangePartitioner(
            partial(self._connector.fetch_range, table, index_position=index_position),
            poll_interval=self._policy.poll_interval,
            scan_id=str(table),
        )
        return await partitioner.scan(KeyRange.of(lower, upper), hints)

    async def scan_all_rows_by_cursor(
        self,
        table: TableRef,
        primary_key: str,
        limit: int | None = None,
        lower_bound: Any = 0,
        upper_bound: Any = -1,
        index_position: int = 1,
    ) -> list[Row]:
        """Rows of a table, following truncation with the ``primary_key`` cursor.

        Returns:
            Up to ``limit`` rows in key order

        Raises:
            MissingCursorKey: If a truncated page lacks ``primary_key``
        """
        paginator = CursorPaginator(
            partial(self._connector.fetch_range, table, index_position=index_position),
            field_accessor(primary_key),
            primary_key=primary_key,
            scan_id=str(table),
        )
        return await paginator.scan_all(
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            limit=self._policy.cursor_limit if limit is None else limit,
        )

    async def fetch_table(
        self,
        table: TableRef,
        limit: int = DEFAULT_TABLE_LIMIT,
        lower_bound: Any = 0,
        upper_bound: Any = -1,
        index_position: int = 1,
    ) -> list[Row]:
        """One page of table rows; truncation is reported in the log, not followed.

        Use ``scan_all_rows_by_cursor`` to get every row.
        """
        page = await self._connector.fetch_range(
            table, lower_bound, upper_bound, limit, index_position=index_position
        )
        if page.more and (limit <= 0 or len(page.rows) < limit):
            log_truncation_advisory(scan_id=str(table), rows=len(page.rows), limit=limit)
        return page.rows

    async def scan_range(
        self,
        table: TableRef,
        start: int | str,
        length: int = 1,
        index_position: int = 1,
    ) -> list[Row]:
        """Up to ``length`` rows with keys in ``[start, start + length]``.

        ``start`` may be an account name; its uint64 encoding is used for
        the upper bound.

        Raises:
            InvalidRange: If ``length`` is negative
        """
        if length < 0:
            raise InvalidRange(f"Range length ({length}) must not be negative")
        if isinstance(start, int):
            upper: int | str = start + length
        else:
            upper = str(encode_name(start) + length)
        return await self.fetch_table(
            table,
            limit=length,
            lower_bound=start,
            upper_bound=upper,
            index_position=index_position,
        )

    async def fetch_table_item(self, table: TableRef, key: int | str) -> Row | None:
        """The row stored under ``key``, or None."""
        rows = await self.scan_range(table, key, 1)
        return rows[0] if rows else None

    async def get_table_by_scope(
        self,
        code: str,
        table: str | None = None,
        lower_bound: str = "",
        upper_bound: str = "",
        limit: int | None = None,
    ) -> list[Row]:
        """Every scope of ``code`` (optionally of one table), following ``more``."""
        rows: list[Row] = []
        lower = lower_bound
        while True:
            page = await self._connector.get_table_by_scope(
                code, table, lower_bound=lower, upper_bound=upper_bound, limit=limit
            )
            rows.extend(page.rows)
            if not page.more or not page.next_key or page.next_key == lower:
                break
            lower = page.next_key
        return rows

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def get_transaction(self, tx_id: str) -> dict[str, Any] | None:
        return await self._connector.get_transaction(tx_id)

    async def wait_transaction(
        self,
        tx_id: str,
        max_rounds: int = WAIT_TX_MAX_ROUNDS,
        interval: float = WAIT_TX_INTERVAL,
    ) -> dict[str, Any] | None:
        """Poll for ``tx_id`` until the history node knows it.

        Returns:
            The transaction, or None after ``max_rounds`` retries
        """
        for round_ in range(max_rounds + 1):
            try:
                tx = await self.get_transaction(tx_id)
                if tx:
                    return tx
            except ChainError as e:
                logger.debug(f"Waiting for tx {tx_id}, retry round {round_}: {e}")
            if round_ < max_rounds:
                await asyncio.sleep(interval)
        logger.error(f"Transaction {tx_id} not found after {max_rounds} rounds")
        return None

    async def call(
        self,
        code: str,
        action: str,
        data: Any,
        *authorization: PermissionLevel | dict[str, str] | str,
    ) -> dict[str, Any]:
        """Submit a single action to contract ``code``.

        Raises:
            ChainError: If no TransactionSubmitter was configured
        """
        if self._submitter is None:
            raise ChainError("No transaction submitter configured for write calls")

        payload = {
            "actions": [
                {
                    "account": code,
                    "name": action,
                    "data": data,
                    "authorization": [
                        _permission_level(auth).model_dump() for auth in authorization
                    ],
                }
            ]
        }
        trx = await self._submitter.transaction(payload)
        self._storyboard.push(payload)
        logger.info(
            "action_submitted",
            extra={
                "code": code,
                "action": action,
                "authorization": [str(_permission_level(a)) for a in authorization],
                "history_size": len(self._storyboard),
            },
        )
        return trx

    async def transfer(
        self,
        account: PermissionLevel | str,
        target: str,
        quantity: str,
        memo: str = "",
        token_account: str = DEFAULT_TOKEN_CONTRACT,
    ) -> dict[str, Any]:
        """Transfer ``quantity`` (e.g. "1.0000 EOS") from ``account`` to ``target``."""
        auth = _permission_level(account)
        data = {"from": auth.actor, "to": target, "quantity": quantity, "memo": memo}
        trx = await self.call(token_account, "transfer", data, auth)
        logger.info(f"Transfer submitted, txID: {trx.get('transaction_id')}")
        return trx

    async def update_auth(
        self,
        account: str,
        permission: str,
        parent: str,
        threshold: int,
        keys: list[dict[str, Any]],
        accounts: list[dict[str, Any]],
        waits: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Replace the authority of ``account@permission``."""
        data = {
            "account": account,
            "permission": permission,
            "parent": parent,
            "auth": {
                "threshold": threshold,
                "keys": keys,
                "accounts": accounts,
                "waits": waits or [],
            },
        }
        auth = PermissionLevel(actor=account, permission=parent or "owner")
        return await self.call("eosio", "updateauth", data, auth)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @staticmethod
    def help() -> str:
        """Short reference of the public methods."""
        return """
### Chain API

```python
await get_info() / get_block(block_num_or_id)
await get_abi(code) / get_table_abi(code, table) / abi_json_to_bin(code, action, args)

await get_account(account)
await get_pub_keys(account, authority="active") / get_pub_key(account, authority="active")
recover_signature(signature, message)
await validate_signature(signature, message, account, authority="active", *plugins)

await get_action_max_seq(account) / get_action_count(account) / get_recent_actions(account)
await scan_actions(account, start_pos=0, offset=0)
await scan_all_actions(account, on_page, start_pos=0, page_size=100, concurrency=10)

await get_balances(account, code="eosio.token") / get_balance(account, code, symbol)

await scan_all_rows(table, lower=0, upper=None, hints=())
await scan_all_rows_by_cursor(table, primary_key, limit=None)
await fetch_table(table, limit=10, lower_bound=0, upper_bound=-1, index_position=1)
await scan_range(table, start, length=1) / fetch_table_item(table, key)
await get_table_by_scope(code, table=None)

await get_transaction(tx_id) / wait_transaction(tx_id, max_rounds=12, interval=1.009)
await call(code, action, data, *authorization)
await transfer(account, target, quantity, memo="")
await update_auth(account, permission, parent, threshold, keys, accounts, waits=None)
```
"""

    async def close(self) -> None:
        """Close the API and clean up resources."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing ChainAPI")
        if self._owns_connector:
            await self._connector.close()

    async def __aenter__(self) -> ChainAPI:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
