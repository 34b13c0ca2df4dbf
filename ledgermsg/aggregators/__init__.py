"""
ledgermsg/aggregators — bundle grouping and reattachment resolution.
"""

from ledgermsg.aggregators.attempt_resolver import select_authoritative_attempt
from ledgermsg.aggregators.bundle_grouper import group_fragments

__all__ = [
    "group_fragments",
    "select_authoritative_attempt",
]
