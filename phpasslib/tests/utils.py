"""helpers for phpasslib unittests"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
import os
import unittest
import warnings
#site
#pkg
#local
__all__ = [
    #util funcs
    'enable_option',
    'classproperty',

    #unit testing
    'TestCase',
]

#=========================================================
#option flags
#=========================================================
DEFAULT_TESTS = ""

tests = set(
    v.strip()
    for v
    in os.environ.get("PHPASS_TESTS", DEFAULT_TESTS).lower().split(",")
    )

def enable_option(*names):
    """check if a given test should be included based on the env var.

    test flags:
        slow            enable tests which hash with large rounds values
        all             run all tests
    """
    return 'all' in tests or any(name in tests for name in names)

class classproperty(object):
    """Function decorator which acts like a combination of classmethod+property (limited to read-only properties)"""

    def __init__(self, func):
        self.im_func = func

    def __get__(self, obj, cls):
        return self.im_func(cls)

#=========================================================
#custom test base
#=========================================================
class TestCase(unittest.TestCase):
    """phpasslib-specific test case class

    this class adds a number of features to the standard TestCase...
    * common prefix for all test descriptions
    * resets warnings filter & registry for every test
    * tweaks to message formatting
    * __msg__ kwd added to assertRaises()
    * assertWarningList() for matching against caught warnings
    """
    #----------------------------------------------------------------
    # make it easy for test cases to add common prefix to shortDescription
    #----------------------------------------------------------------

    # string prepended to all tests in TestCase
    descriptionPrefix = None

    def shortDescription(self):
        "wrap shortDescription() method to prepend descriptionPrefix"
        desc = super(TestCase, self).shortDescription()
        prefix = self.descriptionPrefix
        if prefix:
            desc = "%s: %s" % (prefix, desc or str(self))
        return desc

    #----------------------------------------------------------------
    # skip subclasses whose names start with "_"
    #----------------------------------------------------------------
    @classproperty
    def __unittest_skip__(cls):
        return cls.__name__.startswith("_")

    #----------------------------------------------------------------
    # reset warning filters & registry before each test
    #----------------------------------------------------------------
    def setUp(self):
        super(TestCase, self).setUp()
        ctx = warnings.catch_warnings()
        ctx.__enter__()
        self.addCleanup(ctx.__exit__, None, None, None)
        warnings.resetwarnings()
        warnings.simplefilter("always")

    #----------------------------------------------------------------
    # tweak message formatting so longMessage mode is only enabled
    # if msg ends with ":", and turn on longMessage by default.
    #----------------------------------------------------------------
    longMessage = True

    def _formatMessage(self, msg, std):
        if self.longMessage and msg and msg.rstrip().endswith(":"):
            return '%s %s' % (msg.rstrip(), std)
        else:
            return msg or std

    #----------------------------------------------------------------
    # override assertRaises() to support '__msg__' keyword
    #----------------------------------------------------------------
    def assertRaises(self, _exc_type, _callable=None, *args, **kwds):
        msg = kwds.pop("__msg__", None)
        if _callable is None:
            return super(TestCase, self).assertRaises(_exc_type, *args, **kwds)
        try:
            result = _callable(*args, **kwds)
        except _exc_type:
            return
        std = "function returned %r, expected it to raise %r" % (result,
                                                                 _exc_type)
        raise self.failureException(self._formatMessage(msg, std))

    #----------------------------------------------------------------
    # warning helpers
    #----------------------------------------------------------------
    def assertWarningList(self, wlist, desc=None, msg=None):
        """check that warning list (e.g. from catch_warnings) matches pattern

        each entry in *desc* may be a regexp the message must match,
        or a warning class the warning must be an instance of.
        """
        if not isinstance(desc, (list, tuple)):
            desc = [] if desc is None else [desc]
        if len(wlist) != len(desc):
            std = "expected %d warnings, found %d: %r" % \
                    (len(desc), len(wlist), [str(w.message) for w in wlist])
            raise self.failureException(self._formatMessage(msg, std))
        for entry, wmsg in zip(desc, wlist):
            if isinstance(entry, str):
                self.assertRegex(str(wmsg.message), entry, msg)
            elif isinstance(entry, type) and issubclass(entry, Warning):
                self.assertIsInstance(wmsg.message, entry, msg)
            else:
                raise TypeError("entry must be str or warning class")

#=========================================================
#EOF
#=========================================================
