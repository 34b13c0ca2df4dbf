"""
ledgermsg/aggregators/bundle_grouper.py
Partitions an unordered batch of fragments by bundle (group_id).

Stable: fragments keep their input order inside a group, and groups
come out in the order their first fragment was seen.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from ledgermsg.models.record import FragmentRecord

logger = logging.getLogger(__name__)


def group_fragments(records: Iterable[FragmentRecord]) -> Dict[str, List[FragmentRecord]]:
    """Return {group_id: [fragments]} in first-occurrence order of group_id."""
    groups: Dict[str, List[FragmentRecord]] = defaultdict(list)
    for record in records:
        groups[record.group_id].append(record)

    logger.debug(f"Grouped fragments into {len(groups)} bundles")
    return dict(groups)
