"""phpasslib.phpass - PHPass Portable Hash

phpass located - http://www.openwall.com/phpass/
algorithm described - http://www.openwall.com/articles/PHP-Users-Passwords

this is the "portable" fallback hash used by WordPress & friends
when bcrypt isn't available: an md5 chain, salted with 8 characters
and iterated ``2**rounds`` times.
"""
#=========================================================
#imports
#=========================================================
#core
from hashlib import md5
import logging; log = logging.getLogger(__name__)
from warnings import warn
#site
#libs
from phpasslib.exc import ExpectedStringError, HashDecodeError, InvalidCharacterError, \
                          InvalidIdentifierError, InvalidRoundsError, InvalidSaltError, \
                          MalformedDigestError, MalformedHashError, OldFormatError, \
                          PhpassHashWarning, VerificationError
from phpasslib.rng import srandom, getrandstr, norm_rng
from phpasslib.utils import env_int, is_ascii_safe, to_bytes, validate_secret
from phpasslib.utils import h64
#pkg
#local
__all__ = [
    "PasswordHashRecord",
    "calc_checksum",

    "identify",
    "parse",
    "verify",
    "generate",
    "create",
    "encrypt",
    "genconfig",
    "needs_update",
]

#=========================================================
#constants
#=========================================================
name = "phpass"
IDENT = "$P$"
SALT_SIZE = 8
CHECKSUM_SIZE = 16
CHECKSUM_CHARS = 22
HASH_SIZE = len(IDENT) + 1 + SALT_SIZE + CHECKSUM_CHARS # == 34

MIN_ROUNDS = 0
MAX_ROUNDS = len(h64.CHARS) - 1

#: rounds used when generating new hashes; 13 is what the legacy generator uses.
DEFAULT_ROUNDS = env_int("PHPASS_DEFAULT_ROUNDS", 13, min=MIN_ROUNDS, max=30)

#=========================================================
#checksum engine
#=========================================================
def _md5(data):
    return md5(data).digest()

def _norm_rounds(rounds):
    if not isinstance(rounds, int) or isinstance(rounds, bool):
        raise TypeError("rounds must be an integer")
    if rounds < MIN_ROUNDS or rounds > MAX_ROUNDS:
        raise ValueError("rounds must be in range %d..%d: %r" % (MIN_ROUNDS, MAX_ROUNDS, rounds))
    return rounds

def calc_checksum(secret, salt, rounds, digest=_md5):
    """calculate raw phpass checksum for a secret.

    :arg secret: password as bytes or unicode (encoded as utf-8)
    :arg salt: 8 byte salt (unicode salts are encoded as ascii)
    :arg rounds: log2 of the number of md5 iterations (0..63)
    :param digest:
        md5 primitive taking bytes and returning the 16 byte digest,
        defaults to :func:`hashlib.md5`.

    :returns: 16 byte checksum
    """
    secret = validate_secret(secret)
    salt = to_bytes(salt, "ascii", "salt")
    if len(salt) != SALT_SIZE:
        raise ValueError("salt must be exactly %d bytes" % SALT_SIZE)
    real_rounds = 1 << _norm_rounds(rounds)
    result = digest(salt + secret)
    r = 0
    while r < real_rounds:
        result = digest(result + secret)
        r += 1
    return result

#=========================================================
#record
#=========================================================
class PasswordHashRecord(object):
    """parsed phpass portable hash.

    instances are immutable; they're normally created through
    :meth:`from_string` or :meth:`from_secret`.

    :arg rounds: log2 of the md5 iteration count (0..63)
    :arg salt: the 8 salt characters, as ascii bytes
    :arg checksum: the raw 16 byte md5 checksum
    """
    #=========================================================
    #class attrs
    #=========================================================
    name = name
    ident = IDENT

    __slots__ = ("_rounds", "_salt", "_checksum")

    #=========================================================
    #init
    #=========================================================
    def __init__(self, rounds, salt, checksum):
        self._rounds = _norm_rounds(rounds)
        self._salt = self._norm_salt(salt)
        if not isinstance(checksum, bytes):
            raise TypeError("checksum must be bytes")
        if len(checksum) != CHECKSUM_SIZE:
            raise MalformedDigestError("got %d bytes" % len(checksum))
        self._checksum = checksum

    @classmethod
    def _norm_salt(cls, salt, strict=False):
        "normalize salt to 8 ascii bytes; if strict, require hash64 chars"
        if isinstance(salt, str):
            if not is_ascii_safe(salt):
                raise InvalidSaltError("salt must be ascii")
            salt = salt.encode("ascii")
        elif not isinstance(salt, bytes):
            raise ExpectedStringError(salt, "salt")
        elif not is_ascii_safe(salt):
            raise InvalidSaltError("salt must be ascii")
        if len(salt) != SALT_SIZE:
            raise InvalidSaltError("salt must be exactly %d chars" % SALT_SIZE)
        if strict and any(c not in h64.CHARS for c in salt.decode("ascii")):
            raise InvalidSaltError("salt must contain only hash64 chars (./0-9A-Za-z)")
        return salt

    rounds = property(lambda self: self._rounds, doc="log2 of the md5 iteration count")
    salt = property(lambda self: self._salt, doc="8 byte salt")
    checksum = property(lambda self: self._checksum, doc="16 byte raw md5 checksum")

    #=========================================================
    #value semantics
    #=========================================================
    def _key(self):
        return (self._rounds, self._salt, self._checksum)

    def __eq__(self, other):
        if not isinstance(other, PasswordHashRecord):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self.to_string())

    def __str__(self):
        return self.to_string()

    #=========================================================
    #formatting
    #=========================================================
    @classmethod
    def identify(cls, hash):
        "check if hash looks like a phpass portable hash"
        if not hash:
            return False
        if isinstance(hash, bytes):
            return hash.startswith(IDENT.encode("ascii"))
        if isinstance(hash, str):
            return hash.startswith(IDENT)
        return False

    #$P$BgUdq1RzEBYd9Tm/uZC7mz/l5F.x4N1
    # $P$
    # B
    # gUdq1RzE
    # BYd9Tm/uZC7mz/l5F.x4N1

    @classmethod
    def from_string(cls, hash):
        """parse phpass hash string into record.

        :raises TypeError: if hash isn't unicode or bytes
        :raises MalformedHashError:
            (a :exc:`ValueError` subclass) if the hash can't be parsed;
            see :mod:`phpasslib.exc` for the specific subclasses.
        """
        try:
            return cls._parse(hash)
        except MalformedHashError as err:
            log.debug("rejected phpass hash: %s", err)
            raise

    @classmethod
    def _parse(cls, hash):
        if isinstance(hash, bytes):
            try:
                hash = hash.decode("ascii")
            except UnicodeDecodeError:
                raise HashDecodeError("hash must be ascii")
        elif not isinstance(hash, str):
            raise ExpectedStringError(hash, "hash")

        #NOTE: modular-crypt style strings get their identifier checked first,
        # so eg a short md5_crypt hash is reported as the wrong scheme;
        # anything else that's too short is taken as an unsalted md5 hex digest.
        ident = hash[:3]
        if hash.startswith("$") and ident != IDENT:
            raise InvalidIdentifierError(ident)
        if len(hash) < HASH_SIZE:
            raise OldFormatError()
        if ident != IDENT:
            raise InvalidIdentifierError(ident)

        try:
            rounds = h64.decode_6bit(hash[3])
        except InvalidCharacterError as err:
            raise InvalidRoundsError("found %r" % (err.char,))

        salt = hash[4:12]
        if not is_ascii_safe(salt):
            raise HashDecodeError("salt must be ascii")

        chk = hash[12:]
        try:
            checksum = h64.decode_bytes(chk)
        except InvalidCharacterError as err:
            raise HashDecodeError("found %r in checksum" % (err.char,))
        except ValueError:
            raise MalformedDigestError("checksum has %d chars, expected %d" %
                                       (len(chk), CHECKSUM_CHARS))
        if len(checksum) != CHECKSUM_SIZE:
            raise MalformedDigestError("got %d bytes" % len(checksum))

        #unused high bits of the last char were discarded by decode_bytes()
        if h64.encode_bytes(checksum) != chk:
            warn("phpass hash has non-zero padding bits in checksum, "
                 "and should be re-encoded: %r" % (hash,), PhpassHashWarning)

        return cls(rounds, salt.encode("ascii"), checksum)

    def to_string(self):
        "render record as 34 char phpass hash string"
        return "%s%s%s%s" % (IDENT, h64.encode_6bit(self._rounds),
                             self._salt.decode("ascii"),
                             h64.encode_bytes(self._checksum))

    @classmethod
    def genconfig(cls, rounds=None, salt=None, rng=None):
        """generate 12 char phpass config string (``$P$`` + rounds + salt).

        any settings not specified are filled in from :data:`DEFAULT_ROUNDS`
        and a freshly generated salt.
        """
        rounds = DEFAULT_ROUNDS if rounds is None else _norm_rounds(rounds)
        salt = cls._generate_salt(rng) if salt is None else cls._norm_salt(salt, strict=True)
        return "%s%s%s" % (IDENT, h64.encode_6bit(rounds), salt.decode("ascii"))

    @staticmethod
    def _generate_salt(rng=None):
        rng = srandom if rng is None else norm_rng(rng)
        return getrandstr(rng, h64.CHARS, SALT_SIZE).encode("ascii")

    #=========================================================
    #hashing
    #=========================================================
    @classmethod
    def from_secret(cls, secret, rounds=None, salt=None, rng=None, digest=_md5):
        """hash secret, returning new record.

        :arg secret: password to hash (bytes, or unicode encoded as utf-8)
        :param rounds: log2 of iteration count, defaults to :data:`DEFAULT_ROUNDS`
        :param salt: 8 hash64 chars; generated using *rng* if omitted.
        :param rng: random source for salt generation, defaults to :data:`phpasslib.rng.srandom`
        :param digest: md5 primitive, see :func:`calc_checksum`
        """
        rounds = DEFAULT_ROUNDS if rounds is None else _norm_rounds(rounds)
        if salt is None:
            salt = cls._generate_salt(rng)
        else:
            salt = cls._norm_salt(salt, strict=True)
        return cls(rounds, salt, calc_checksum(secret, salt, rounds, digest))

    def check(self, secret, digest=_md5):
        """check secret against record.

        :raises VerificationError: if the secret doesn't match
        """
        #NOTE: plain comparison, not constant time
        if calc_checksum(secret, self._salt, self._rounds, digest) != self._checksum:
            log.debug("phpass checksum mismatch (rounds=%d)", self._rounds)
            raise VerificationError()

    def verify(self, secret, digest=_md5):
        "check secret against record, returning ``True`` or ``False``"
        try:
            self.check(secret, digest)
        except VerificationError:
            return False
        return True

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#quickstart interface
#=========================================================
identify = PasswordHashRecord.identify
parse = PasswordHashRecord.from_string
genconfig = PasswordHashRecord.genconfig

def verify(secret, hash):
    """verify secret against phpass hash string.

    :returns: ``True`` if the secret matches, otherwise ``False``.
    :raises ValueError: if the hash is malformed.
    """
    return parse(hash).verify(secret)

def generate(secret, rounds, salt):
    "hash secret using explicit rounds & salt, returning 34 char hash string"
    return PasswordHashRecord.from_secret(secret, rounds=rounds, salt=salt).to_string()

def create(secret, rounds=None, rng=None):
    "hash secret using a fresh random salt, returning 34 char hash string"
    return PasswordHashRecord.from_secret(secret, rounds=rounds, rng=rng).to_string()

encrypt = create

def needs_update(hash, rounds=None):
    """check if hash was generated with fewer rounds than desired.

    :param rounds: desired rounds, defaults to :data:`DEFAULT_ROUNDS`
    """
    target = DEFAULT_ROUNDS if rounds is None else _norm_rounds(rounds)
    return parse(hash).rounds < target

#=========================================================
#eof
#=========================================================
