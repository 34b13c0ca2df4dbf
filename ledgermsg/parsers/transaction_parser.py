"""
ledgermsg/parsers/transaction_parser.py
Turns ledger transaction objects into FragmentRecords.

Accepts either the JSON shape returned by the node API (camelCase keys)
or a client-side object exposing the same fields as snake_case
attributes:

  bundle / bundle                                -> group_id
  currentIndex / current_index                   -> sequence_index
  lastIndex / last_index                         -> last_index
  attachmentTimestamp / attachment_timestamp     -> attempt_timestamp
  signatureMessageFragment / signature_message_fragment -> payload_chunk
  hash / hash                                    -> tx_hash

payload_encoding:
  'trytes' - the message field is raw trytes. They are checked against
             the tryte alphabet and kept as-is: a character can straddle
             two fragments, so decoding waits until the attempt's
             fragments are ordered and joined (see bundle_extractor).
  'ascii'  - the message field is already text; use it verbatim.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from ledgermsg.codec.trytes import PAYLOAD_ENCODINGS, is_trytes
from ledgermsg.models.record import FragmentRecord

logger = logging.getLogger(__name__)

# (record field, camelCase key, snake_case attribute)
_FIELDS = (
    ('group_id',          'bundle',                   'bundle'),
    ('sequence_index',    'currentIndex',             'current_index'),
    ('last_index',        'lastIndex',                'last_index'),
    ('attempt_timestamp', 'attachmentTimestamp',      'attachment_timestamp'),
    ('payload_chunk',     'signatureMessageFragment', 'signature_message_fragment'),
)
_INT_FIELDS = {'sequence_index', 'last_index', 'attempt_timestamp'}


def _lookup(tx: Any, key: str, attr: str) -> Optional[Any]:
    if isinstance(tx, Mapping):
        if key in tx:
            return tx[key]
        return tx.get(attr)
    return getattr(tx, attr, getattr(tx, key, None))


def parse_transaction(tx: Any, payload_encoding: str = 'trytes') -> FragmentRecord:
    """
    Convert one ledger transaction into a FragmentRecord.
    Raises ValueError when a field is missing or malformed.
    """
    if payload_encoding not in PAYLOAD_ENCODINGS:
        raise ValueError(f"Unknown payload encoding: {payload_encoding!r}")

    values = {}
    for name, key, attr in _FIELDS:
        raw = _lookup(tx, key, attr)
        if raw is None:
            raise ValueError(f"Transaction missing field '{key}'")
        if name in _INT_FIELDS:
            try:
                raw = int(raw)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Field '{key}' is not an integer: {raw!r}") from e
        values[name] = raw

    if not isinstance(values['payload_chunk'], str):
        raise ValueError("Field 'signatureMessageFragment' is not a string")
    if payload_encoding == 'trytes' and not is_trytes(values['payload_chunk']):
        raise ValueError("Field 'signatureMessageFragment' is not a tryte string")

    return FragmentRecord(
        group_id          = str(values['group_id']),
        sequence_index    = values['sequence_index'],
        last_index        = values['last_index'],
        attempt_timestamp = values['attempt_timestamp'],
        payload_chunk     = values['payload_chunk'],
        tx_hash           = str(_lookup(tx, 'hash', 'hash') or ''),
    )


def parse_transactions(
    txs:              Iterable[Any],
    payload_encoding: str = 'trytes',
) -> List[FragmentRecord]:
    """
    Parse a batch of transactions, keeping input order.
    Records that fail to parse are logged and skipped.
    """
    records: List[FragmentRecord] = []
    skipped = 0
    for position, tx in enumerate(txs):
        try:
            records.append(parse_transaction(tx, payload_encoding))
        except ValueError as e:
            skipped += 1
            logger.warning(f"Skipping transaction #{position}: {e}")

    logger.info(f"Parsed {len(records)} transactions ({skipped} skipped)")
    return records
