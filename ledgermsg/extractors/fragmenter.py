"""
ledgermsg/extractors/fragmenter.py
Submission side: serialize a value and split it into fragments.

The output is what extract_logical_messages() expects to read back:
escaped ASCII JSON, cut into chunk_size pieces with sequence indices
0..n-1 and last_index n-1.

With payload_encoding='trytes' the escaped JSON is converted to one
tryte stream first and cut into FRAGMENT_TRYTES pieces, the way the
ledger lays out a message over several transactions. Only the last
piece is padded.
"""

import json
from typing import Any, List, Optional

from ledgermsg.codec.escape import encode_non_ascii
from ledgermsg.codec.trytes import (
    FRAGMENT_CHARS,
    FRAGMENT_TRYTES,
    PAYLOAD_ENCODINGS,
    split_tryte_stream,
    to_trytes,
)
from ledgermsg.models.record import FragmentRecord


def serialize_message(value: Any) -> str:
    """JSON-encode a value and escape every non-ASCII character."""
    text = json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    return encode_non_ascii(text)


def _split_text(data: str, chunk_size: int) -> List[str]:
    total = (len(data) + chunk_size - 1) // chunk_size or 1
    return [data[i * chunk_size:(i + 1) * chunk_size] for i in range(total)]


def fragment_message(
    group_id:          str,
    value:             Any,
    attempt_timestamp: int,
    chunk_size:        Optional[int] = None,
    payload_encoding:  str = 'ascii',
) -> List[FragmentRecord]:
    """
    Serialize value and cut it into one attempt's worth of fragments.

    chunk_size counts characters for 'ascii' (default FRAGMENT_CHARS)
    and trytes for 'trytes' (default FRAGMENT_TRYTES).
    """
    if payload_encoding not in PAYLOAD_ENCODINGS:
        raise ValueError(f"Unknown payload encoding: {payload_encoding!r}")
    if chunk_size is None:
        chunk_size = FRAGMENT_TRYTES if payload_encoding == 'trytes' else FRAGMENT_CHARS
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    data = serialize_message(value)
    if payload_encoding == 'trytes':
        chunks = split_tryte_stream(to_trytes(data), chunk_size)
    else:
        chunks = _split_text(data, chunk_size)

    return [
        FragmentRecord(
            group_id          = group_id,
            sequence_index    = i,
            last_index        = len(chunks) - 1,
            attempt_timestamp = attempt_timestamp,
            payload_chunk     = chunk,
        )
        for i, chunk in enumerate(chunks)
    ]
