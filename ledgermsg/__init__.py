"""
ledgermsg — rebuild structured messages from ledger bundle fragments.

Groups transactions by bundle, drops reattachments, joins the payload
chunks in order, unescapes non-ASCII text and parses the JSON.
"""

__version__ = "1.0.0"

from ledgermsg.codec.escape import decode_non_ascii, encode_non_ascii
from ledgermsg.extractors.bundle_extractor import (
    MalformedAttemptError,
    extract_logical_messages,
    extract_values,
)
from ledgermsg.extractors.fragmenter import fragment_message, serialize_message
from ledgermsg.models.record import FragmentRecord, LogicalMessage

__all__ = [
    "FragmentRecord",
    "LogicalMessage",
    "MalformedAttemptError",
    "decode_non_ascii",
    "encode_non_ascii",
    "extract_logical_messages",
    "extract_values",
    "fragment_message",
    "serialize_message",
]
