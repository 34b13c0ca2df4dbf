"""
ledgermsg/codec/escape.py
Non-ASCII escape codec.

The ledger only carries ASCII message text, so every character above
U+007F is written as a literal 4-hex-digit escape (\\u00e9) before the
payload is split into fragments, and turned back into the character
after the fragments are joined.

NOTE ON ASTRAL CHARACTERS:
  Escapes hold one UTF-16 code unit. A character above U+FFFF is written
  as two escapes, high then low surrogate. decode_non_ascii() turns each
  escape back into its own code unit and does not re-pair them, so an
  astral character comes back as two surrogate halves. Known limitation;
  BMP text (surrogate code points included) round-trips exactly.

Both functions return None for falsy input instead of raising.
Callers must check for the None sentinel.
"""

import re
from typing import Optional

_NON_ASCII = re.compile('[\u0080-\U0010ffff]')
_ESCAPE = re.compile(r'\\u([0-9a-fA-F]{4})')


def _escape_char(match: re.Match) -> str:
    code = ord(match.group(0))
    if code > 0xFFFF:
        code -= 0x10000
        high = 0xD800 + (code >> 10)
        low  = 0xDC00 + (code & 0x3FF)
        return f'\\u{high:04x}\\u{low:04x}'
    return f'\\u{code:04x}'


def _unescape_char(match: re.Match) -> str:
    return chr(int(match.group(1), 16))


def encode_non_ascii(value: Optional[str]) -> Optional[str]:
    """Replace every character above U+007F with its \\uXXXX escape."""
    if not value:
        return None
    return _NON_ASCII.sub(_escape_char, value)


def decode_non_ascii(value: Optional[str]) -> Optional[str]:
    """Replace every \\uXXXX escape with the character it names."""
    if not value:
        return None
    return _ESCAPE.sub(_unescape_char, value)
