"""Queue of proven transactions waiting to be grouped into batches."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from .accounts import AccountId
from .digest import Digest

COMPONENT = "miden-block-producer"

MAX_NOTES_PER_BATCH = 4096
"""Largest number of output notes that a single batch may create."""

logger = logging.getLogger(COMPONENT)


@dataclass(frozen=True)
class ProvenTransaction:
    """A transaction whose execution has been proven."""

    id: Digest
    account_id: AccountId
    num_output_notes: int = 0

    def __post_init__(self) -> None:
        if self.num_output_notes < 0:
            raise ValueError("num_output_notes must not be negative")


# ERRORS
# ------------------------------------------------------------------------------------------------


class VerifyTxError(Exception):
    """A transaction conflicts with the rollup state or with in-flight transactions."""


class AddTransactionError(Exception):
    """A transaction could not be added to the queue."""

    def __init__(self, cause: VerifyTxError) -> None:
        super().__init__(f"Transaction verification failed: {cause}")
        self.cause = cause


class BuildBatchError(Exception):
    """A batch could not be built; carries the transactions it was built from."""

    def __init__(self, message: str, transactions: Iterable[ProvenTransaction]) -> None:
        super().__init__(message)
        self.transactions = list(transactions)

    def into_transactions(self) -> list[ProvenTransaction]:
        return list(self.transactions)


# COLLABORATORS
# ------------------------------------------------------------------------------------------------


class TransactionValidator(ABC):
    """Tracks in-flight transactions and checks that new ones do not conflict."""

    @abstractmethod
    async def verify_tx(self, tx: ProvenTransaction) -> None:
        """Check ``tx``; raise :class:`VerifyTxError` if it is not valid."""


class BatchBuilder(ABC):
    """Turns a group of transactions into a batch."""

    @abstractmethod
    async def build_batch(self, txs: list[ProvenTransaction]) -> None:
        """Build a batch; raise :class:`BuildBatchError` to hand the transactions back."""


# TRANSACTION QUEUE
# ------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class TransactionQueueOptions:
    build_batch_frequency: float
    """Seconds between attempts to build batches from the queue."""
    batch_size: int
    """Largest number of transactions in a batch."""
    max_notes_per_batch: int = MAX_NOTES_PER_BATCH

    def __post_init__(self) -> None:
        if self.build_batch_frequency <= 0:
            raise ValueError("build_batch_frequency must be positive")
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.max_notes_per_batch < 0:
            raise ValueError("max_notes_per_batch must not be negative")


class TransactionQueue:
    """Holds verified transactions and periodically hands them to a batch builder."""

    def __init__(
        self,
        tx_validator: TransactionValidator,
        batch_builder: BatchBuilder,
        options: TransactionQueueOptions,
    ) -> None:
        self._ready: list[ProvenTransaction] = []
        self._tx_validator = tx_validator
        self._batch_builder = batch_builder
        self._options = options
        self._tasks: set[asyncio.Task[None]] = set()

    def pending(self) -> list[ProvenTransaction]:
        """Return a copy of the transactions waiting to be batched."""
        return list(self._ready)

    async def run(self) -> None:
        """Build batches at the configured frequency, forever."""
        logger.info(
            "Transaction queue started, period %d ms",
            int(self._options.build_batch_frequency * 1000),
        )
        while True:
            self.try_build_batches()
            await asyncio.sleep(self._options.build_batch_frequency)

    def try_build_batches(self) -> list[asyncio.Task[None]]:
        """Split the queue into batches and start building each one.

        Transactions of a batch that fails to build go back to the end of the
        queue. Returns the tasks that build the batches.
        """
        if not self._ready:
            logger.debug("Transaction queue empty")
            return []

        txs, self._ready = self._ready, []
        limit = self._options.max_notes_per_batch
        started: list[asyncio.Task[None]] = []

        while txs:
            batch: list[ProvenTransaction] = []
            notes_in_batch = 0
            while txs:
                tx = txs[-1]
                notes_in_batch += tx.num_output_notes
                if notes_in_batch > limit or len(batch) == self._options.batch_size:
                    break
                batch.append(txs.pop())

            task = asyncio.create_task(self._build(batch))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            started.append(task)

        return started

    async def _build(self, batch: list[ProvenTransaction]) -> None:
        try:
            await self._batch_builder.build_batch(batch)
        except BuildBatchError as err:
            logger.info("Batch building failed, returning transactions to the queue: %s", err)
            self._ready.extend(err.into_transactions())

    async def add_transaction(self, tx: ProvenTransaction) -> None:
        """Verify ``tx`` and queue it to be added to a batch."""
        logger.info("tx_id=%s account_id=%s", tx.id.to_hex(), tx.account_id)
        if tx.num_output_notes > self._options.max_notes_per_batch:
            raise ValueError(
                "the number of output notes of a single transaction must never be "
                "larger than the batch maximum"
            )

        try:
            await self._tx_validator.verify_tx(tx)
        except VerifyTxError as err:
            raise AddTransactionError(err) from err

        self._ready.append(tx)
        logger.info("Transaction added to tx queue, queue_len=%d", len(self._ready))