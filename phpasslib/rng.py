"""phpasslib.rng - randomness source used for salt generation

this provides a proxy object named "srandom" which is initialized
to point to system random if possible, falling back to python's prng.
a proxy object is used so applications can provide an alternate
randomness source, and all functions in phpasslib will use that source instead
(see :meth:`RandomProxy.set_rng`).

this module also provides some utility functions for generating random strings
(:func:`getrandstr` and :func:`getrandbytes`).
"""
#=================================================================================
#imports
#=================================================================================
#core
import logging; log = logging.getLogger(__name__)
import os
import random as _random
from warnings import warn
#site
#pkg
#local
__all__ = [
    # random proxy used by phpasslib
    'srandom',
    'RandomProxy',
    'norm_rng',

    #helper for creating Rng sources
    'StreamRandom',
    'SystemRandom',

    #utils not part of stdlib random object
    'getrandbytes',
    'getrandstr',
]

#=================================================================================
#helper class for implementing other random sources
#=================================================================================
class StreamRandom(_random.Random):
    """helper which provides Random subclass that pulls all data from single abstract method: getrandbytes()

    :arg source:
        either a callable which takes a byte count and returns that many random bytes
        (eg :func:`os.urandom`), or a readable binary stream.
    """
    #NOTE: this basically clones the stdlib's SystemRandom implementation,
    #but calls self.getrandbytes() instead of os.urandom

    def __init__(self, source=None):
        if source is not None:
            if hasattr(source, "read"):
                source = source.read
            self.getrandbytes = source
        super(StreamRandom, self).__init__()

    def getrandbytes(self, count):
        "return bytes containing specified number of random bytes"
        raise NotImplementedError("getrandbytes() must be implemented by subclass or instance constructor")

    def random(self):
        """Get the next random number in the range [0.0, 1.0)."""
        return (int.from_bytes(self.getrandbytes(7), "big") >> 3) * 2.0**-53

    def getrandbits(self, k):
        """getrandbits(k) -> x.  Generates an int with k random bits."""
        if k < 0:
            raise ValueError('number of bits must be non-negative')
        count = (k + 7) // 8                    # bits / 8 and rounded up
        data = self.getrandbytes(count)
        if len(data) != count:
            raise ValueError("random source returned %d bytes, expected %d" % (len(data), count))
        x = int.from_bytes(data, "big")
        return x >> (count * 8 - k)             # trim excess bits

    def seed(self, *args, **kwds):
        "stub, stream sources have no state to seed"
        return None

    def _notimplemented(self, *args, **kwds):
        "subclasses may implement these if they wish"
        raise NotImplementedError('%s entropy source does not have state.' % (self.__class__.__name__,))
    getstate = setstate = _notimplemented

#=================================================================================
#system random helper class
#=================================================================================

#NOTE: this is done mainly to speed up :func:`getrandbytes` calls
class SystemRandom(_random.SystemRandom):
    "subclass of random.SystemRandom which implements getrandbytes as urandom call"
    def getrandbytes(self, count):
        return os.urandom(count)

#check if os.urandom is available
try:
    os.urandom(1)
except NotImplementedError: #pragma: no cover
    has_urandom = False
else:
    has_urandom = True

#=================================================================================
#setup proxy for chosen strong random source
#=================================================================================
class RandomProxy(object):
    "proxy object for RNG instances"
    def __init__(self, name, rng=None):
        self.__name = name
        self.__rng = None
        if rng:
            self.set_rng(rng)

    def __getattr__(self, attr):
        rng = self.__rng
        if rng is None:
            raise AttributeError("attribute not found (no RNG specified for proxy %r)" % (self.__name,))
        return getattr(rng, attr)

    def get_rng(self):
        "return rng instance currently used by this proxy object"
        return self.__rng

    def set_rng(self, source):
        """change rng source which this proxy object uses

        :arg source:
            replacement RNG. can be one of the following:

            * class or instance of :class:`random.Random` or a subclass.
            * callable which takes in byte count and returns random bytes (eg :func:`os.urandom`)
            * a stream which contains an unending source of random bytes (eg: ``open("/dev/urandom", "rb")`` on unix)
            * predefined constant "system", which uses SystemRandom - raises EnvironmentError if urandom not available
            * predefined constant "default", which resets the proxy to the rng phpasslib would use by default.

        :returns: the rng instance now in use.
        """
        source = norm_rng(source)
        log.debug("rng proxy %r now using %r", self.__name, source)
        self.__rng = source
        return source

    def __repr__(self):
        return "<RandomProxy %r target=%r>" % (self.__name, self.__rng)

def norm_rng(source):
    """convert any of the rng sources accepted by :meth:`RandomProxy.set_rng`
    into an object with the :class:`random.Random` interface."""
    if isinstance(source, str):
        if source == "system":
            if not has_urandom:
                raise EnvironmentError("urandom support not available")
            source = SystemRandom
        elif source == "default":
            source = get_default_rng()
        else:
            raise ValueError("unknown preset random source: %r" % (source,))
    if hasattr(source, "randrange"): #random class or instance
        if isinstance(source, type):
            source = source()
    elif hasattr(source, "read") or callable(source):
        source = StreamRandom(source)
    else:
        raise TypeError("unknown random source type: %r" % (source,))
    return source

def get_default_rng():
    "return default rng class for phpasslib to use"
    if has_urandom:
        return SystemRandom
    log.warning("os.urandom() not available, falling back to random.Random")
    warn("Your system lacks urandom support, phpasslib's salts will be predictable")
    return _random.Random

#proxy for whichever RNG has been selected for phpasslib routines to use.
srandom = RandomProxy(name="strong random", rng="default")

#=================================================================================
#random number helpers
#=================================================================================
def getrandbytes(rng, count):
    """return bytes of *count* number of random bytes, using specified rng"""
    #just in case rng provides this (eg our SystemRandom subclass above)...
    meth = getattr(rng, "getrandbytes", None)
    if meth:
        return meth(count)
    if not count:
        return b""
    return rng.getrandbits(count << 3).to_bytes(count, "little")

def getrandstr(rng, alphabet, count):
    """return string of *count* number of chars, whose elements are drawn from specified alphabet"""
    #check alphabet & count
    if count < 0:
        raise ValueError("count must be >= 0")
    letters = len(alphabet)
    if letters == 0:
        raise ValueError("alphabet must not be empty")
    if letters == 1:
        return alphabet * count

    #get random value, and write out to buffer
    #XXX: break into chunks for large number of bits?
    value = rng.randrange(0, letters**count)
    buf = []
    for i in range(count):
        buf.append(alphabet[value % letters])
        value //= letters
    assert value == 0
    return "".join(buf)

#=================================================================================
#eof
#=================================================================================
