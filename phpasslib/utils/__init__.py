"""phpasslib utility functions"""
#=================================================================================
#imports
#=================================================================================
#core
import logging; log = logging.getLogger(__name__)
import os
from warnings import warn
#site
#pkg
from phpasslib.exc import ExpectedStringError, PasswordSizeError, \
                          PhpassConfigWarning
#local
__all__ = [
    #config
    'env_int',
    'MAX_PASSWORD_SIZE',

    #bytes<->unicode
    'to_bytes',
    'is_ascii_safe',

    #secrets
    'validate_secret',
]

#=================================================================================
#environment config
#=================================================================================
def env_int(name, default, min=None, max=None):
    """read integer setting from environment variable *name*.

    if the variable is unset, returns *default*. if it's set but isn't an
    integer inside ``[min, max]``, issues a :exc:`PhpassConfigWarning`
    and returns *default*.
    """
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        result = int(value)
    except ValueError:
        result = None
    if result is None or (min is not None and result < min) or \
            (max is not None and result > max):
        warn("ignoring invalid %s=%r, using default %r" % (name, value, default),
             PhpassConfigWarning)
        return default
    log.debug("using %s=%r from environment", name, result)
    return result

#: maximum password size which phpasslib will hash (see PasswordSizeError)
MAX_PASSWORD_SIZE = env_int("PHPASS_MAX_PASSWORD_SIZE", 4096, min=1)

#=================================================================================
#bytes <-> unicode conversion helpers
#=================================================================================
def to_bytes(source, encoding="utf-8", errname="value"):
    """helper to encoding unicode -> bytes

    this function takes in a ``source`` string.
    if unicode, encodes it using the specified ``encoding``.
    if bytes, returns unchanged.
    all other types result in a :exc:`TypeError`.

    :raises TypeError: if source is not unicode or bytes.
    :raises UnicodeEncodeError: if source can't be encoded using ``encoding``.

    :returns: bytes object
    """
    if isinstance(source, bytes):
        return source
    elif isinstance(source, str):
        return source.encode(encoding)
    else:
        raise ExpectedStringError(source, errname)

def is_ascii_safe(source):
    "check if source (bytes or unicode) contains only 7-bit ascii"
    r = 128 if isinstance(source, bytes) else "\x80"
    return all(c < r for c in source)

#=================================================================================
#secret handling
#=================================================================================
def validate_secret(secret):
    """normalize secret to bytes, and check it's within MAX_PASSWORD_SIZE.

    phpass hashes raw bytes; unicode secrets are encoded as utf-8,
    which matches how php hands strings to md5().
    """
    secret = to_bytes(secret, "utf-8", "secret")
    if len(secret) > MAX_PASSWORD_SIZE:
        raise PasswordSizeError(MAX_PASSWORD_SIZE)
    return secret

#=================================================================================
#eof
#=================================================================================
