"""phpasslib - parse, verify & generate phpass portable password hashes"""
#=========================================================
#imports
#=========================================================
import logging

__version__ = "1.0"

#library should stay quiet unless application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

#=========================================================
#quickstart interface
#=========================================================
from phpasslib.phpass import PasswordHashRecord, calc_checksum, identify, parse, \
                             verify, generate, create, encrypt, genconfig, needs_update

__all__ = [
    "__version__",
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
#eof
#=========================================================
