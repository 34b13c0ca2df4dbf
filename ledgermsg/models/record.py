"""
ledgermsg/models/record.py
Shared dataclass schema. Parsers, aggregators, extractors and the
ledger helper all use these types. Keep behaviour out of this module.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FragmentRecord:
    """One ledger transaction carrying a chunk of a larger message."""
    group_id:          str          # bundle hash, shared by every attempt
    sequence_index:    int          # currentIndex within the attempt
    last_index:        int          # index of the final fragment of the attempt
    attempt_timestamp: int          # attachmentTimestamp of the attempt
    payload_chunk:     str          # escaped text slice, or raw message-field trytes
    tx_hash:           str = ''     # diagnostics only


@dataclass
class LogicalMessage:
    """One structured value rebuilt from a single authoritative attempt."""
    group_id:          str
    value:             Any
    attempt_timestamp: int
    fragment_count:    int
