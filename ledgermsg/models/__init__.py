"""
ledgermsg/models — shared data schema.
"""

from ledgermsg.models.record import FragmentRecord, LogicalMessage

__all__ = [
    "FragmentRecord",
    "LogicalMessage",
]
