"""
ledgermsg/extractors/bundle_extractor.py
Rebuilds structured messages from ledger fragments.

PIPELINE (one pass per bundle, bundles in first-seen order):
  group_fragments -> select_authoritative_attempt -> sequence_fragments
  -> concatenate_payload -> materialize (decode_tryte_stream when the
  chunks are raw trytes, then decode_non_ascii + json.loads)

LENIENT MODE (default, strict=False):
  No structural checks. Gaps, duplicates or a short attempt produce a
  best-effort concatenation; the only failure point is json.loads, and
  its JSONDecodeError propagates to the caller unchanged. The caller
  decides whether to re-query for more fragments or give up.

STRICT MODE (strict=True):
  validate_attempt() runs on the selected fragments first and raises
  MalformedAttemptError instead of handing a corrupt payload to the
  JSON parser.

Only counts and bundle ids are logged, never payload text.
"""

import json
import logging
from typing import Any, Iterable, List, Sequence

from ledgermsg.aggregators.attempt_resolver import select_authoritative_attempt
from ledgermsg.aggregators.bundle_grouper import group_fragments
from ledgermsg.codec.escape import decode_non_ascii
from ledgermsg.codec.trytes import PAYLOAD_ENCODINGS, decode_tryte_stream
from ledgermsg.models.record import FragmentRecord, LogicalMessage

logger = logging.getLogger(__name__)


class MalformedAttemptError(ValueError):
    """Raised in strict mode when an attempt's fragments do not line up."""

    def __init__(self, group_id: str, reason: str):
        super().__init__(f"Bundle {group_id}: {reason}")
        self.group_id = group_id
        self.reason   = reason


# ── SEQUENCING ───────────────────────────────────────────────

def sequence_fragments(fragments: Iterable[FragmentRecord]) -> List[FragmentRecord]:
    """Stable sort by sequence_index."""
    return sorted(fragments, key=lambda f: f.sequence_index)


def concatenate_payload(fragments: Iterable[FragmentRecord]) -> str:
    return ''.join(f.payload_chunk for f in fragments)


def validate_attempt(fragments: Sequence[FragmentRecord]) -> None:
    """
    Strict-mode check on a selected attempt.
    Every fragment must share one timestamp and one last_index, and the
    sequence indices must be exactly 0..last_index.
    """
    if not fragments:
        raise MalformedAttemptError('?', 'no fragments')

    first    = fragments[0]
    group_id = first.group_id

    timestamps = {f.attempt_timestamp for f in fragments}
    if len(timestamps) > 1:
        raise MalformedAttemptError(group_id, f"mixed attempt timestamps {sorted(timestamps)}")

    last_indexes = {f.last_index for f in fragments}
    if len(last_indexes) > 1:
        raise MalformedAttemptError(group_id, f"inconsistent last_index {sorted(last_indexes)}")

    indexes = sorted(f.sequence_index for f in fragments)
    if indexes != list(range(first.last_index + 1)):
        raise MalformedAttemptError(
            group_id,
            f"expected indices 0..{first.last_index}, got {indexes}",
        )


# ── MATERIALIZATION ──────────────────────────────────────────

def materialize(payload: str, payload_encoding: str = 'ascii') -> Any:
    """
    Decode escapes and parse as JSON.
    With payload_encoding='trytes' the payload is the joined tryte stream
    of one attempt and is converted to text first.
    An empty payload decodes to None and fails the parse like any other
    invalid document; json.JSONDecodeError is not caught here.
    """
    if payload_encoding not in PAYLOAD_ENCODINGS:
        raise ValueError(f"Unknown payload encoding: {payload_encoding!r}")
    if payload_encoding == 'trytes':
        payload = decode_tryte_stream(payload)
    data = decode_non_ascii(payload)
    return json.loads(data or '')


# ── PUBLIC ENTRY POINTS ──────────────────────────────────────

def extract_logical_messages(
    records:          Iterable[FragmentRecord],
    strict:           bool = False,
    payload_encoding: str  = 'ascii',
) -> List[LogicalMessage]:
    """
    Rebuild one LogicalMessage per distinct group_id.

    Args:
        records: Unordered fragments for one or more bundles, possibly
                 including reattachments.
        strict:  False reproduces the lenient behaviour (no structural
                 checks). True raises MalformedAttemptError on gaps,
                 duplicates or mixed attempts.
        payload_encoding: 'ascii' when payload_chunk holds text, 'trytes'
                 when it holds the raw message field of a transaction.

    Returns:
        List[LogicalMessage] in first-occurrence order of group_id.

    Raises:
        json.JSONDecodeError: a concatenated payload is not valid JSON.
        MalformedAttemptError: strict mode only.
    """
    records = list(records)
    groups  = group_fragments(records)

    messages: List[LogicalMessage] = []
    for group_id, fragments in groups.items():
        selected = select_authoritative_attempt(fragments)
        if strict:
            validate_attempt(selected)

        ordered = sequence_fragments(selected)
        value   = materialize(concatenate_payload(ordered), payload_encoding)

        messages.append(LogicalMessage(
            group_id          = group_id,
            value             = value,
            attempt_timestamp = selected[0].attempt_timestamp,
            fragment_count    = len(selected),
        ))

    logger.info(
        f"Extracted {len(messages)} messages from {len(records)} fragments "
        f"({'strict' if strict else 'lenient'})"
    )
    return messages


def extract_values(
    records:          Iterable[FragmentRecord],
    strict:           bool = False,
    payload_encoding: str  = 'ascii',
) -> List[Any]:
    """Same as extract_logical_messages() but returns only the values."""
    messages = extract_logical_messages(records, strict=strict, payload_encoding=payload_encoding)
    return [m.value for m in messages]
