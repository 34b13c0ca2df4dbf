"""
tests/test_aggregators.py
Bundle grouping and reattachment resolution.
"""

from ledgermsg.aggregators.attempt_resolver import select_authoritative_attempt
from ledgermsg.aggregators.bundle_grouper import group_fragments
from ledgermsg.models.record import FragmentRecord


def _frag(group: str = 'B', index: int = 0, last: int = 1, ts: int = 100,
          chunk: str = '') -> FragmentRecord:
    return FragmentRecord(
        group_id=group, sequence_index=index, last_index=last,
        attempt_timestamp=ts, payload_chunk=chunk or f'{group}{index}@{ts}',
    )


# ── GROUPING ────────────────────────────────────────────────

class TestGroupFragments:

    def test_groups_in_first_occurrence_order(self):
        records = [_frag('Y'), _frag('X'), _frag('Y', 1), _frag('Z'), _frag('X', 1)]
        groups = group_fragments(records)
        assert list(groups) == ['Y', 'X', 'Z']

    def test_input_order_kept_within_group(self):
        a, b, c = _frag('X', 1), _frag('Y', 0), _frag('X', 0)
        groups = group_fragments([a, b, c])
        assert groups['X'] == [a, c]
        assert groups['Y'] == [b]

    def test_every_record_lands_in_one_group(self):
        records = [_frag(g, i) for g in 'ABC' for i in range(2)]
        groups = group_fragments(records)
        assert sum(len(v) for v in groups.values()) == len(records)

    def test_empty_input(self):
        assert group_fragments([]) == {}

    def test_accepts_iterator(self):
        groups = group_fragments(iter([_frag('A')]))
        assert list(groups) == ['A']


# ── ATTEMPT RESOLUTION ──────────────────────────────────────

class TestSelectAuthoritativeAttempt:

    def test_single_attempt_kept_whole(self):
        frags = [_frag(index=1), _frag(index=0)]
        assert select_authoritative_attempt(frags) == frags

    def test_later_reattachment_dropped(self):
        first  = [_frag(index=0, ts=100), _frag(index=1, ts=100)]
        second = [_frag(index=0, ts=200), _frag(index=1, ts=200)]
        selected = select_authoritative_attempt(second + first)
        assert selected == first

    def test_earliest_attempt_wins_with_different_sizes(self):
        early = [_frag(index=0, last=0, ts=50)]
        late  = [_frag(index=i, last=2, ts=90) for i in range(3)]
        assert select_authoritative_attempt(late + early) == early

    def test_equal_timestamps_keep_input_order(self):
        a0, b0 = _frag(index=0, ts=100, chunk='a0'), _frag(index=0, ts=100, chunk='b0')
        a1, b1 = _frag(index=1, ts=100, chunk='a1'), _frag(index=1, ts=100, chunk='b1')
        # Two attempts sharing a timestamp: the slice mixes them, unchanged
        selected = select_authoritative_attempt([a0, b0, a1, b1])
        assert selected == [a0, b0]

    def test_short_attempt_takes_following_fragments(self):
        # Attempt at ts=100 lost fragment 1; the slice borrows from ts=200
        frags = [_frag(index=0, ts=100), _frag(index=0, ts=200), _frag(index=1, ts=200)]
        selected = select_authoritative_attempt(frags)
        assert [f.attempt_timestamp for f in selected] == [100, 200]

    def test_empty_input(self):
        assert select_authoritative_attempt([]) == []

    def test_input_not_mutated(self):
        frags = [_frag(index=0, ts=200), _frag(index=0, ts=100)]
        snapshot = list(frags)
        select_authoritative_attempt(frags)
        assert frags == snapshot
