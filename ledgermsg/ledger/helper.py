"""
ledgermsg/ledger/helper.py
Async wrappers over a callback-style LedgerClient, plus the one
composite operation this package exists for: fetch a bundle's
transactions and rebuild its messages.

Usage:
    helper   = LedgerHelper(client)
    messages = await helper.find_messages_async(bundles=[bundle_hash])
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ledgermsg.extractors.bundle_extractor import extract_logical_messages
from ledgermsg.ledger.async_adapter import call_async
from ledgermsg.ledger.base import LedgerClient
from ledgermsg.models.record import LogicalMessage
from ledgermsg.parsers.transaction_parser import parse_transactions

logger = logging.getLogger(__name__)


def _drop_unset(**values: Any) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


class LedgerHelper:

    def __init__(self, client: LedgerClient):
        self.client = client

    # ── NODE OPERATIONS ──────────────────────────────────────
    async def find_transaction_objects_async(
        self,
        bundles:   Optional[List[str]] = None,
        addresses: Optional[List[str]] = None,
        tags:      Optional[List[str]] = None,
        approvees: Optional[List[str]] = None,
    ) -> List[Any]:
        """Only the criteria that were passed are sent to the node."""
        search_values = _drop_unset(
            bundles=bundles, addresses=addresses, tags=tags, approvees=approvees,
        )
        return await call_async(self.client.find_transaction_objects, search_values)

    async def get_new_address_async(
        self,
        seed:       str,
        index:      Optional[int]  = None,
        checksum:   Optional[bool] = None,
        total:      Optional[int]  = None,
        security:   Optional[int]  = None,
        return_all: Optional[bool] = None,
    ) -> Union[str, List[str]]:
        options = _drop_unset(
            index=index, checksum=checksum, total=total,
            security=security, returnAll=return_all,
        )
        return await call_async(self.client.get_new_address, seed, options)

    async def send_transfer_async(
        self,
        seed:                 str,
        depth:                int,
        min_weight_magnitude: int,
        transfers:            List[Dict[str, Any]],
        options:              Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        return await call_async(
            self.client.send_transfer,
            seed, depth, min_weight_magnitude, transfers, options or {},
        )

    # ── MESSAGE RETRIEVAL ────────────────────────────────────
    async def find_messages_async(
        self,
        bundles:          Optional[List[str]] = None,
        addresses:        Optional[List[str]] = None,
        tags:             Optional[List[str]] = None,
        approvees:        Optional[List[str]] = None,
        payload_encoding: str  = 'trytes',
        strict:           bool = False,
    ) -> List[LogicalMessage]:
        """
        Fetch matching transactions and rebuild one message per bundle.
        JSON parse errors (and MalformedAttemptError when strict) reach
        the caller, who may re-query once more fragments are attached.
        """
        txs = await self.find_transaction_objects_async(
            bundles=bundles, addresses=addresses, tags=tags, approvees=approvees,
        )
        logger.info(f"Fetched {len(txs)} transactions")
        records = parse_transactions(txs, payload_encoding=payload_encoding)
        return extract_logical_messages(records, strict=strict, payload_encoding=payload_encoding)
