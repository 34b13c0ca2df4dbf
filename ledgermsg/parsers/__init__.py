"""
ledgermsg/parsers — ledger transaction parsing.
"""

from ledgermsg.parsers.transaction_parser import (
    PAYLOAD_ENCODINGS,
    parse_transaction,
    parse_transactions,
)

__all__ = [
    "PAYLOAD_ENCODINGS",
    "parse_transaction",
    "parse_transactions",
]
