"""
ledgermsg/extractors — message reconstruction and its submission-side mirror.
"""

from ledgermsg.extractors.bundle_extractor import (
    MalformedAttemptError,
    concatenate_payload,
    extract_logical_messages,
    extract_values,
    materialize,
    sequence_fragments,
    validate_attempt,
)
from ledgermsg.extractors.fragmenter import fragment_message, serialize_message

__all__ = [
    "MalformedAttemptError",
    "concatenate_payload",
    "extract_logical_messages",
    "extract_values",
    "fragment_message",
    "materialize",
    "sequence_fragments",
    "serialize_message",
    "validate_attempt",
]
