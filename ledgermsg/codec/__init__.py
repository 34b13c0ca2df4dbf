"""
ledgermsg/codec — text codecs for the ledger message field.
"""

from ledgermsg.codec.escape import decode_non_ascii, encode_non_ascii
from ledgermsg.codec.trytes import (
    FRAGMENT_CHARS,
    FRAGMENT_TRYTES,
    PAYLOAD_ENCODINGS,
    decode_tryte_stream,
    from_trytes,
    is_trytes,
    split_tryte_stream,
    strip_padding,
    to_trytes,
)

__all__ = [
    "FRAGMENT_CHARS",
    "FRAGMENT_TRYTES",
    "PAYLOAD_ENCODINGS",
    "decode_non_ascii",
    "decode_tryte_stream",
    "encode_non_ascii",
    "from_trytes",
    "is_trytes",
    "split_tryte_stream",
    "strip_padding",
    "to_trytes",
]
