"""
ledgermsg/ledger — callback-to-coroutine adapter and ledger helper.
"""

from ledgermsg.ledger.async_adapter import LedgerCallbackError, call_async
from ledgermsg.ledger.base import LedgerClient
from ledgermsg.ledger.helper import LedgerHelper

__all__ = [
    "LedgerCallbackError",
    "LedgerClient",
    "LedgerHelper",
    "call_async",
]
