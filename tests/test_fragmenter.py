"""
tests/test_fragmenter.py
Submission side: serialize + split, and reading the result back.
"""

import random

import pytest

from ledgermsg.codec.trytes import FRAGMENT_CHARS, FRAGMENT_TRYTES, decode_tryte_stream
from ledgermsg.extractors.bundle_extractor import extract_values
from ledgermsg.extractors.fragmenter import fragment_message, serialize_message


class TestSerializeMessage:

    def test_non_ascii_escaped(self):
        assert serialize_message({'name': 'café'}) == '{"name":"caf\\u00e9"}'

    def test_compact_separators(self):
        assert serialize_message({'a': [1, 2]}) == '{"a":[1,2]}'

    def test_output_is_ascii(self):
        assert serialize_message(['東京', '\U0001F600']).isascii()


class TestFragmentMessage:

    def test_small_value_single_fragment(self):
        frags = fragment_message('B', {'a': 1}, attempt_timestamp=100)
        assert len(frags) == 1
        assert frags[0].sequence_index == 0
        assert frags[0].last_index == 0
        assert frags[0].payload_chunk == '{"a":1}'

    def test_split_sizes_and_indices(self):
        value = {'text': 'x' * 40}
        frags = fragment_message('B', value, attempt_timestamp=100, chunk_size=8)
        data = serialize_message(value)
        assert len(frags) == -(-len(data) // 8)
        assert [f.sequence_index for f in frags] == list(range(len(frags)))
        assert {f.last_index for f in frags} == {len(frags) - 1}
        assert {f.attempt_timestamp for f in frags} == {100}
        assert ''.join(f.payload_chunk for f in frags) == data

    def test_default_chunk_fits_one_fragment(self):
        frags = fragment_message('B', 'y' * (FRAGMENT_CHARS * 2), attempt_timestamp=1)
        assert len(frags) == 3
        assert all(len(f.payload_chunk) <= FRAGMENT_CHARS for f in frags)

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            fragment_message('B', {}, attempt_timestamp=1, chunk_size=0)

    def test_unknown_encoding(self):
        with pytest.raises(ValueError):
            fragment_message('B', {}, attempt_timestamp=1, payload_encoding='hex')


class TestTryteFragments:

    def test_stream_cut_into_full_fragments(self):
        value = {'text': 'x' * 1500}
        frags = fragment_message('T', value, attempt_timestamp=1, payload_encoding='trytes')
        assert len(frags) == 2
        assert all(len(f.payload_chunk) == FRAGMENT_TRYTES for f in frags)
        assert frags[1].payload_chunk.endswith('9')

    def test_only_last_fragment_padded(self):
        frags = fragment_message('T', 'abcdefgh', attempt_timestamp=1,
                                 chunk_size=7, payload_encoding='trytes')
        joined = ''.join(f.payload_chunk for f in frags)
        assert all(len(f.payload_chunk) == 7 for f in frags)
        assert decode_tryte_stream(joined) == serialize_message('abcdefgh')


class TestRoundTrip:

    def test_shuffled_fragments_with_reattachment(self):
        value = {'city': 'Zürich', 'n': list(range(20))}
        first  = fragment_message('R', value, attempt_timestamp=100, chunk_size=7)
        second = fragment_message('R', {'other': True}, attempt_timestamp=250, chunk_size=7)
        records = first + second
        random.Random(42).shuffle(records)
        assert extract_values(records) == [value]

    def test_astral_value_returns_surrogate_halves(self):
        frags = fragment_message('E', {'emoji': '\U0001F600'}, attempt_timestamp=1, chunk_size=5)
        assert extract_values(frags) == [{'emoji': '\ud83d\ude00'}]

    def test_tryte_fragments_across_boundaries(self):
        value = {'text': 'x' * 1500, 'city': 'Zürich'}
        first  = fragment_message('R', value, attempt_timestamp=100, payload_encoding='trytes')
        second = fragment_message('R', [0], attempt_timestamp=300, payload_encoding='trytes')
        records = second + first[::-1]
        assert extract_values(records, payload_encoding='trytes') == [value]

    def test_several_bundles(self):
        records = (
            fragment_message('P', {'id': 1}, attempt_timestamp=5, chunk_size=3) +
            fragment_message('Q', ['ä', 'ö'], attempt_timestamp=6, chunk_size=3)
        )
        assert extract_values(records) == [{'id': 1}, ['ä', 'ö']]
