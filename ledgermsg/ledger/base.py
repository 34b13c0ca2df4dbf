"""
ledgermsg/ledger/base.py
Abstract base class for ledger clients.
To plug in a node library: subclass LedgerClient and forward each
operation to it. Every operation is callback-style and must call
callback(error, result) exactly once; LedgerHelper turns them into
coroutines.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

Callback = Callable[[Optional[Any], Optional[Any]], None]


class LedgerClient(ABC):
    """
    The three node operations ledgermsg needs.
    Address derivation, signing, proof-of-work and transport all live
    behind these calls; nothing here inspects them.
    """

    @abstractmethod
    def find_transaction_objects(
        self,
        search_values: Dict[str, List[str]],
        callback:      Callback,
    ) -> None:
        """
        Look up transactions matching any of the search values
        (keys: bundles, addresses, tags, approvees).
        Result: list of transaction objects.
        """
        ...

    @abstractmethod
    def get_new_address(
        self,
        seed:     str,
        options:  Dict[str, Any],
        callback: Callback,
    ) -> None:
        """Result: one address, or a list when options ask for several."""
        ...

    @abstractmethod
    def send_transfer(
        self,
        seed:                 str,
        depth:                int,
        min_weight_magnitude: int,
        transfers:            List[Dict[str, Any]],
        options:              Dict[str, Any],
        callback:             Callback,
    ) -> None:
        """Result: list of the attached transaction objects."""
        ...
