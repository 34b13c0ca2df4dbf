"""
ledgermsg/codec/trytes.py
ASCII <-> tryte conversion for the signatureMessageFragment field.

Each ASCII byte becomes two trytes from the alphabet 9A-Z:
  first  = byte % 27
  second = byte // 27

STREAM MODEL:
  A message is converted to one tryte stream and cut into consecutive
  FRAGMENT_TRYTES pieces. 2187 is odd, so the tryte pair of every other
  character crosses a fragment boundary; a fragment on its own is not
  decodable. Only the last fragment is padded with '9', and that tail
  reads back as NUL bytes ('99') until strip_padding() removes it.
  Decode the ordered, joined fragments with decode_tryte_stream().
"""

from typing import Dict, List

PAYLOAD_ENCODINGS = ('trytes', 'ascii')

TRYTE_ALPHABET  = '9ABCDEFGHIJKLMNOPQRSTUVWXYZ'
FRAGMENT_TRYTES = 2187
FRAGMENT_CHARS  = FRAGMENT_TRYTES // 2     # whole characters a lone fragment can hold

_TRYTE_VALUES: Dict[str, int] = {t: i for i, t in enumerate(TRYTE_ALPHABET)}


def to_trytes(text: str) -> str:
    """Convert ASCII text to trytes. Escape non-ASCII text first."""
    out = []
    for ch in text:
        code = ord(ch)
        if code > 0xFF:
            raise ValueError(f"Character {ch!r} cannot be converted to trytes")
        out.append(TRYTE_ALPHABET[code % 27])
        out.append(TRYTE_ALPHABET[code // 27])
    return ''.join(out)


def from_trytes(trytes: str) -> str:
    """Convert trytes back to text. Raises ValueError on malformed input."""
    if len(trytes) % 2:
        raise ValueError(f"Tryte string has odd length: {len(trytes)}")
    chars = []
    for i in range(0, len(trytes), 2):
        try:
            first  = _TRYTE_VALUES[trytes[i]]
            second = _TRYTE_VALUES[trytes[i + 1]]
        except KeyError as e:
            raise ValueError(f"Invalid tryte at offset {i}: {e}") from e
        chars.append(chr(first + second * 27))
    return ''.join(chars)


def is_trytes(value: str) -> bool:
    return all(t in _TRYTE_VALUES for t in value)


def strip_padding(trytes: str) -> str:
    """
    Drop trailing '99' pairs (NUL padding) from a tryte stream.
    Pairs are counted from the start of the stream; an odd final tryte
    belongs to no character and is dropped too.
    """
    end = len(trytes) - (len(trytes) % 2)
    while end >= 2 and trytes[end - 2:end] == '99':
        end -= 2
    return trytes[:end]


def decode_tryte_stream(trytes: str) -> str:
    """Decode the joined fragments of one attempt, padding removed once."""
    return from_trytes(strip_padding(trytes))


def split_tryte_stream(trytes: str, fragment_size: int = FRAGMENT_TRYTES) -> List[str]:
    """
    Cut a tryte stream into fragment_size pieces, padding the last one
    with '9'. Always returns at least one fragment.
    """
    if fragment_size <= 0:
        raise ValueError(f"fragment_size must be positive, got {fragment_size}")
    pieces = [trytes[i:i + fragment_size] for i in range(0, len(trytes), fragment_size)] or ['']
    pieces[-1] = pieces[-1].ljust(fragment_size, '9')
    return pieces
