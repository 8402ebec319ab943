"""phpasslib.utils.h64 - hash64 encoding helpers

phpass encodes its checksum using the same 64 character alphabet
as the unix crypt family (``./0-9A-Za-z``), but packs bytes little-endian:
each 3 byte group is read as a 24-bit integer whose *first* byte is the
least significant, and that integer is written out 6 bits at a time,
least significant bits first. Compared to standard base64 this is the
same as reversing the bytes of each group, encoding normally, then
reversing the 4 output characters.
"""
#=================================================================================
#imports
#=================================================================================
#core
import logging; log = logging.getLogger(__name__)
#site
#pkg
from phpasslib.exc import InvalidCharacterError
#local
__all__ = [
    "CHARS",
    "encode_6bit",  "decode_6bit",
    "encode_group", "decode_group",
    "encode_bytes", "decode_bytes",
]

#=================================================================================
#6 bit value <-> char mapping
#=================================================================================
CHARS = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

#inverse map (char->value)
_CHARIDX = dict((c, i) for i, c in enumerate(CHARS))

def encode_6bit(value):
    "encodes 6-bit integer -> single hash64 character"
    if value < 0 or value > 63:
        raise ValueError("value out of range: %r" % (value,))
    return CHARS[value]

def decode_6bit(char):
    "decodes single hash64 character -> 6-bit integer"
    try:
        return _CHARIDX[char]
    except KeyError:
        raise InvalidCharacterError(char)

#=================================================================================
#3 byte <-> 4 char groups
#=================================================================================
def encode_group(source):
    """encode 3 bytes -> 4 char hash64 string

    the last character holds the 6 most significant bits of the *last* byte;
    the first character holds the 6 least significant bits of the first byte.
    """
    if len(source) != 3:
        raise ValueError("group must be exactly 3 bytes")
    v = source[0] + (source[1] << 8) + (source[2] << 16)
    return  CHARS[v & 0x3f] + \
            CHARS[(v >> 6) & 0x3f] + \
            CHARS[(v >> 12) & 0x3f] + \
            CHARS[(v >> 18) & 0x3f]

def decode_group(source):
    "decode 4 char hash64 string -> 3 bytes; inverse of :func:`encode_group`"
    if len(source) != 4:
        raise ValueError("group must be exactly 4 characters")
    v = decode_6bit(source[0]) + \
        (decode_6bit(source[1]) << 6) + \
        (decode_6bit(source[2]) << 12) + \
        (decode_6bit(source[3]) << 18)
    return bytes((v & 0xff, (v >> 8) & 0xff, v >> 16))

#=================================================================================
#byte strings
#=================================================================================
_PAD_BYTE = b"\x00"
_PAD_CHAR = CHARS[0]

def encode_bytes(source):
    """encode byte string to hash64 format.

    a trailing partial group of 1 or 2 bytes is zero-padded,
    and the output trimmed to the 2 or 3 characters actually needed,
    so 16 bytes encode to 22 characters (no ``=`` style padding).
    """
    end = len(source)
    tail = end % 3
    end -= tail
    out = [encode_group(source[idx:idx+3]) for idx in range(0, end, 3)]
    if tail:
        #NOTE: high bits of the final char are always 0
        chunk = source[end:] + _PAD_BYTE * (3 - tail)
        out.append(encode_group(chunk)[:tail+1])
    return "".join(out)

def decode_bytes(source):
    """decode hash64 format into byte string; inverse of :func:`encode_bytes`

    the unused high bits of a trailing partial group are discarded,
    so callers wanting canonical input should compare against
    ``encode_bytes(result)``.

    :arg source: hash64 string

    :raises ValueError: if ``len(source) % 4 == 1``
    :raises InvalidCharacterError: if the string contains invalid hash64 characters.
    """
    end = len(source)
    tail = end % 4
    if tail == 1:
        #only 6 bits left, can't encode a whole byte!
        raise ValueError("input string length cannot be == 1 mod 4")
    end -= tail
    out = [decode_group(source[idx:idx+4]) for idx in range(0, end, 4)]
    if tail:
        #NOTE: high bits of the final char are ignored (should be 0)
        raw = decode_group(source[end:] + _PAD_CHAR * (4 - tail))
        out.append(raw[:tail-1])
    return b"".join(out)

#=================================================================================
#eof
#=================================================================================
