"""The public RPC interface: validates requests and forwards them to the store or block producer."""

from __future__ import annotations

import logging
import socket
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .accounts import AccountId
from .config import Endpoint
from .convert import try_convert
from .digest import Digest
from .errors import ConversionError
from .txqueue import ProvenTransaction

COMPONENT = "miden-rpc"

logger = logging.getLogger(COMPONENT)


class InvalidArgument(Exception):
    """A request was rejected because one of its arguments is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class StoreClient(ABC):
    """Connection to the store component."""

    @abstractmethod
    async def check_nullifiers(self, request: Any) -> Any:
        """Return the state of the requested nullifiers."""

    @abstractmethod
    async def get_block_header_by_number(self, request: Any) -> Any:
        """Return a block header by its number."""

    @abstractmethod
    async def sync_state(self, request: Any) -> Any:
        """Return the state changes a client needs to catch up."""

    @abstractmethod
    async def get_notes_by_id(self, request: Any) -> Any:
        """Return the notes with the requested ids."""

    @abstractmethod
    async def get_account_details(self, request: Any) -> Any:
        """Return the details of a public account."""


class BlockProducerClient(ABC):
    """Connection to the block producer component."""

    @abstractmethod
    async def submit_proven_transaction(self, request: Any) -> Any:
        """Hand a proven transaction to the block producer."""


def _checked_digest(digest: Digest) -> Digest:
    digest.to_felts()
    return digest


class RpcApi:
    """Checks incoming requests and forwards the valid ones."""

    def __init__(
        self,
        store: StoreClient,
        block_producer: BlockProducerClient,
        decode_transaction: Callable[[bytes], ProvenTransaction],
        verify_transaction: Callable[[ProvenTransaction], None],
    ) -> None:
        self._store = store
        self._block_producer = block_producer
        self._decode_transaction = decode_transaction
        self._verify_transaction = verify_transaction

    async def check_nullifiers(self, request: Any) -> Any:
        logger.debug("check_nullifiers request=%r", request)
        for nullifier in request.nullifiers:
            try:
                _checked_digest(nullifier)
            except ConversionError:
                raise InvalidArgument("Digest field is not in the modulus range") from None
        return await self._store.check_nullifiers(request)

    async def get_block_header_by_number(self, request: Any) -> Any:
        logger.info("get_block_header_by_number request=%r", request)
        return await self._store.get_block_header_by_number(request)

    async def sync_state(self, request: Any) -> Any:
        logger.debug("sync_state request=%r", request)
        return await self._store.sync_state(request)

    async def get_notes_by_id(self, request: Any) -> Any:
        logger.debug("get_notes_by_id request=%r", request)
        try:
            try_convert(list(request.note_ids), _checked_digest)
        except ConversionError as err:
            raise InvalidArgument(f"Invalid NoteId: {err}") from err
        return await self._store.get_notes_by_id(request)

    async def submit_proven_transaction(self, request: Any) -> Any:
        logger.debug("submit_proven_transaction request=%r", request)
        try:
            tx = self._decode_transaction(request.transaction)
        except Exception:
            raise InvalidArgument("Invalid transaction") from None
        try:
            self._verify_transaction(tx)
        except Exception:
            raise InvalidArgument(
                f"Invalid transaction proof for transaction: {tx.id}"
            ) from None
        return await self._block_producer.submit_proven_transaction(request)

    async def get_account_details(self, request: Any) -> Any:
        """Return details of a public account, after checking its id."""
        logger.debug("get_account_details request=%r", request)
        if request.account_id is None:
            raise InvalidArgument("account_id is missing")
        try:
            AccountId.from_proto(request.account_id)
        except ConversionError as err:
            raise InvalidArgument(f"Invalid account id: {err}") from err
        return await self._store.get_account_details(request)


def resolve_address(endpoint: Endpoint) -> tuple[str, int]:
    """Resolve an endpoint to the first socket address it names."""
    infos = socket.getaddrinfo(endpoint.host, endpoint.port, type=socket.SOCK_STREAM)
    for _family, _type, _proto, _name, sockaddr in infos:
        return sockaddr[0], sockaddr[1]
    raise OSError("Couldn't resolve server address")