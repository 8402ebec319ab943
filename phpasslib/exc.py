"""phpasslib.exc -- exceptions & warnings raised by phpasslib"""
#==========================================================================
# exceptions
#==========================================================================
class PhpassError(Exception):
    """base class for all errors raised by phpasslib"""

class InvalidCharacterError(ValueError):
    """Error raised when a character outside the hash64 alphabet
    (``./0-9A-Za-z``) is passed to one of the :mod:`phpasslib.utils.h64`
    decoding functions.

    :attr char: the offending character
    """
    def __init__(self, char):
        self.char = char
        ValueError.__init__(self, "invalid hash64 character: %r" % (char,))

class PasswordSizeError(ValueError):
    """Error raised if the password provided exceeds the limit set by phpasslib.

    Every extra byte of password is hashed ``2**rounds`` times,
    so a maliciously large password could be used to tie up the host.
    phpasslib enforces a maximum of 4096 bytes by default.

    Applications wishing to use a different limit should set the
    ``PHPASS_MAX_PASSWORD_SIZE`` environmental variable before phpasslib
    is loaded.
    """
    def __init__(self, max_size=None):
        self.max_size = max_size
        msg = "password exceeds maximum allowed size"
        if max_size is not None:
            msg = "%s (%d bytes)" % (msg, max_size)
        ValueError.__init__(self, msg)

class InvalidSaltError(PhpassError, ValueError):
    """Error raised when a salt passed to :func:`~phpasslib.phpass.generate`
    is not exactly 8 characters drawn from the hash64 alphabet."""

class VerificationError(PhpassError):
    """Error raised by :meth:`PasswordHashRecord.check` when the password
    does not match the hash.

    Unlike the parsing errors, this does *not* derive from :exc:`ValueError`.
    """
    def __init__(self):
        PhpassError.__init__(self, "password does not match hash")

#--------------------------------------------------------------------------
# hash parsing errors
#--------------------------------------------------------------------------
class MalformedHashError(PhpassError, ValueError):
    """base class for errors raised while parsing a phpass hash string.

    All subclasses derive from :exc:`ValueError`, so callers which just
    want to reject bad input can catch that.
    """
    reason = "malformed phpass hash"

    def __init__(self, detail=None):
        text = self.reason
        if detail:
            text = "%s (%s)" % (text, detail)
        ValueError.__init__(self, text)

class OldFormatError(MalformedHashError):
    """hash is shorter than the 34 chars of a salted portable hash;
    most likely the unsupported unsalted md5 format used by old WordPress."""
    reason = "hash too short for phpass portable format; unsalted md5 hashes are not supported"

class InvalidIdentifierError(MalformedHashError):
    """hash doesn't start with the ``$P$`` identifier"""
    reason = "invalid phpass identifier"

    def __init__(self, ident):
        self.ident = ident
        MalformedHashError.__init__(self, "expected '$P$', found %r" % (ident,))

class InvalidRoundsError(MalformedHashError):
    """rounds character is missing or not a hash64 character"""
    reason = "invalid rounds character"

class HashDecodeError(MalformedHashError):
    """a character in the hash could not be decoded"""
    reason = "invalid character in phpass hash"

class MalformedDigestError(MalformedHashError):
    """checksum portion didn't decode to exactly 16 bytes"""
    reason = "checksum must decode to exactly 16 bytes"

#==========================================================================
# error constructors
#==========================================================================
def type_name(value):
    "return pretty-printed string containing name of value's type"
    cls = value.__class__
    if cls.__module__ and cls.__module__ != "builtins":
        return "%s.%s" % (cls.__module__, cls.__name__)
    elif value is None:
        return 'None'
    else:
        return cls.__name__

def ExpectedTypeError(value, expected, param):
    "error message when param was supposed to be one type, but found another"
    # NOTE: value is never displayed, since it may sometimes be a password.
    name = type_name(value)
    return TypeError("%s must be %s, not %s" % (param, expected, name))

def ExpectedStringError(value, param):
    "error message when param was supposed to be unicode or bytes"
    return ExpectedTypeError(value, "unicode or bytes", param)

#==========================================================================
# warnings
#==========================================================================
class PhpassWarning(UserWarning):
    """base class for phpasslib's user warnings"""

class PhpassConfigWarning(PhpassWarning):
    """Warning issued when an environment setting could not be parsed,
    and phpasslib fell back to its built-in default."""

class PhpassHashWarning(PhpassWarning):
    """Warning issued when a hash string was parsable, but not canonical.

    This happens when the unused high bits of the final checksum character
    are not zero. The hash still verifies, but should be re-encoded.
    """

#==========================================================================
# eof
#==========================================================================
