"""
ledgermsg/aggregators/attempt_resolver.py
Picks the authoritative attempt out of a bundle that may have been
reattached one or more times.

ALGORITHM:
  1. Stable sort every fragment of the bundle by attempt_timestamp.
  2. Read last_index from the earliest fragment.
  3. Keep exactly the first last_index + 1 fragments.

Later reattachments carry strictly larger timestamps and fall off the
end of the slice.

NOTE ON MIXED ATTEMPTS:
  When two attempts share a timestamp, or one attempt's fragments carry
  different timestamps, the slice can mix fragments of several attempts.
  This is kept as-is; it is not detected here. Use strict extraction
  (validate_attempt) to reject such slices.
"""

import logging
from typing import List, Sequence

from ledgermsg.models.record import FragmentRecord

logger = logging.getLogger(__name__)


def select_authoritative_attempt(fragments: Sequence[FragmentRecord]) -> List[FragmentRecord]:
    """Return the fragments of the earliest attempt, reattachments dropped."""
    if not fragments:
        return []

    by_time  = sorted(fragments, key=lambda f: f.attempt_timestamp)
    selected = by_time[:by_time[0].last_index + 1]

    dropped = len(by_time) - len(selected)
    if dropped:
        logger.debug(
            f"Bundle {by_time[0].group_id}: kept {len(selected)} fragments, "
            f"dropped {dropped} from reattachments"
        )
    return selected
